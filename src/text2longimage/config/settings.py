"""Settings management using TOML configuration."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TYPE_CHECKING, Self

from text2longimage.config.paths import CONFIG_FILE

if TYPE_CHECKING:
    from text2longimage.services.render import ImageConfig


@dataclass
class JustifySettings:
    max_chars_per_line: int = 36
    chunk_size: int = 65536  # bytes
    direct_limit: int = 2000  # characters; longer texts take the chunked path
    max_input_chars: int = 500_000


@dataclass
class ImageSettings:
    chars_per_line: int = 18
    font_size: int = 32
    line_spacing: float = 1.5
    font_weight: str = "400"
    padding: int = 42
    font_path: str = ""  # empty = first installed CJK font
    dark_mode: bool = False
    output_dir: str = ""  # empty = current directory

    def to_image_config(self) -> ImageConfig:
        from text2longimage.services.render import ImageConfig

        return ImageConfig(
            chars_per_line=self.chars_per_line,
            font_size=self.font_size,
            line_spacing=self.line_spacing,
            font_weight=self.font_weight,
            padding=self.padding,
            font_path=self.font_path,
        )


@dataclass
class HistorySettings:
    enabled: bool = True
    max_entries: int = 50


SECTION_MAP: dict[str, type] = {
    "justify": JustifySettings,
    "image": ImageSettings,
    "history": HistorySettings,
}


@dataclass
class Settings:
    justify: JustifySettings = field(default_factory=JustifySettings)
    image: ImageSettings = field(default_factory=ImageSettings)
    history: HistorySettings = field(default_factory=HistorySettings)

    @classmethod
    def load(cls, path: Path = CONFIG_FILE) -> Self:
        settings = cls()

        if not path.exists():
            settings._create_default(path)
            return settings

        with open(path, "rb") as f:
            data = tomllib.load(f)

        for section_name in SECTION_MAP:
            if section_name in data:
                section_data = data[section_name]
                section_instance = getattr(settings, section_name)
                for f_info in fields(section_instance):
                    if f_info.name in section_data:
                        setattr(section_instance, f_info.name, section_data[f_info.name])

        return settings

    def save(self, path: Path = CONFIG_FILE) -> None:
        import os

        from text2longimage.config.paths import SECURE_FILE_MODE

        path.parent.mkdir(parents=True, exist_ok=True)
        lines: list[str] = []

        for section_name in SECTION_MAP:
            section = getattr(self, section_name)
            lines.append(f"[{section_name}]")
            for f_info in fields(section):
                value = getattr(section, f_info.name)
                lines.append(f"{f_info.name} = {_format_toml_value(value)}")
            lines.append("")

        path.write_text("\n".join(lines))
        os.chmod(path, SECURE_FILE_MODE)

    def _create_default(self, path: Path) -> None:
        self.save(path)

    @property
    def output_dir(self) -> Path:
        if self.image.output_dir:
            return Path(self.image.output_dir).expanduser()
        return Path.cwd()


def _format_toml_value(value: object) -> str:
    match value:
        case bool():
            return "true" if value else "false"
        case int() | float():
            return repr(value)
        case str():
            escaped = value.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        case _:
            return repr(value)
