"""Long-image rendering of justified text with Pillow."""

from __future__ import annotations

import functools
import logging
import math
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from text2longimage.services.justify import CRLF, justify

logger = logging.getLogger(__name__)

LIGHT_PALETTE = ("#fff", "#222")  # (background, foreground)
DARK_PALETTE = ("#222", "#fff")

_BOLD_WEIGHT = 600

# Checked in order before asking fontconfig.
CJK_FONT_CANDIDATES = (
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/noto-cjk/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/google-noto-cjk/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/wqy/wqy-microhei.ttc",
    "/usr/share/fonts/wenquanyi/wqy-microhei/wqy-microhei.ttc",
    "/usr/share/fonts/truetype/droid/DroidSansFallbackFull.ttf",
    "/System/Library/Fonts/PingFang.ttc",
    "C:/Windows/Fonts/msyh.ttc",
)


@dataclass(frozen=True)
class ImageConfig:
    chars_per_line: int = 18
    font_size: int = 32
    line_spacing: float = 1.5
    font_weight: str = "400"
    padding: int = 42
    font_path: str = ""

    @property
    def max_width_units(self) -> int:
        # chars_per_line counts wide glyphs, which take two width units each.
        return self.chars_per_line * 2

    def __post_init__(self) -> None:
        if self.chars_per_line < 1:
            raise ValueError(f"chars_per_line must be at least 1, got {self.chars_per_line}")
        if self.font_size < 1:
            raise ValueError(f"font_size must be at least 1, got {self.font_size}")
        if self.padding < 0:
            raise ValueError(f"padding must not be negative, got {self.padding}")
        if self.line_spacing <= 0:
            raise ValueError(f"line_spacing must be positive, got {self.line_spacing}")


@dataclass(frozen=True)
class LinePosition:
    text: str
    x: float
    y: float
    line_index: int


def calculate_line_positions(lines: list[str], config: ImageConfig) -> list[LinePosition]:
    """Place each line at the left padding, one ``font_size * line_spacing`` step apart."""
    step = config.font_size * config.line_spacing
    return [
        LinePosition(text=line, x=config.padding, y=step * index + config.padding, line_index=index)
        for index, line in enumerate(lines)
    ]


def canvas_size(line_count: int, config: ImageConfig) -> tuple[int, int]:
    width = config.font_size * config.chars_per_line + config.padding * 2
    height = config.font_size * config.line_spacing * line_count + config.padding * 2
    return math.ceil(width), math.ceil(height)


def _fontconfig_cjk_font() -> str | None:
    if not shutil.which("fc-list"):
        return None
    try:
        result = subprocess.run(
            ["fc-list", ":lang=zh", "file"],
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as exc:
        logger.debug("fc-list failed: %s", exc)
        return None
    # Lines look like "/path/to/font.ttc: ".
    paths = sorted(line.strip().rstrip(":") for line in result.stdout.splitlines() if line.strip())
    return paths[0] if paths else None


@functools.cache
def find_cjk_font() -> str | None:
    """Return the path of an installed font with CJK glyphs, or None."""
    for candidate in CJK_FONT_CANDIDATES:
        if Path(candidate).is_file():
            return candidate
    path = _fontconfig_cjk_font()
    if path is None:
        logger.warning(
            "No CJK font found; wide characters will not render. Set image.font_path in the config."
        )
    return path


def _load_font(config: ImageConfig) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    path = config.font_path or find_cjk_font()
    if path:
        return ImageFont.truetype(path, config.font_size)
    return ImageFont.load_default(size=config.font_size)


def _stroke_width(font_weight: str) -> int:
    try:
        return 1 if int(font_weight) >= _BOLD_WEIGHT else 0
    except ValueError:
        return 1 if font_weight.lower() == "bold" else 0


def render_image(text: str, config: ImageConfig, dark_mode: bool = False) -> Image.Image:
    """Justify *text* for ``config.chars_per_line`` and draw it onto a new RGB image."""
    lines = justify(text, config.max_width_units).split(CRLF)
    background, foreground = DARK_PALETTE if dark_mode else LIGHT_PALETTE

    image = Image.new("RGB", canvas_size(len(lines), config), background)
    draw = ImageDraw.Draw(image)
    font = _load_font(config)
    stroke = _stroke_width(config.font_weight)

    for pos in calculate_line_positions(lines, config):
        if not pos.text:
            continue
        draw.text(
            (pos.x, pos.y),
            pos.text,
            fill=foreground,
            font=font,
            stroke_width=stroke,
            stroke_fill=foreground,
        )

    logger.debug("Rendered %d lines onto a %dx%d image", len(lines), *image.size)
    return image


def save_image(image: Image.Image, directory: Path) -> Path:
    """Write *image* as ``changweibo<epoch-ms>.png`` under *directory*."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"changweibo{time.time_ns() // 1_000_000}.png"
    image.save(path, format="PNG")
    logger.info("Saved image to %s", path)
    return path
