"""Tests for text2longimage.services.render."""

import subprocess

import pytest
from PIL import Image, ImageChops

from text2longimage.services import render
from text2longimage.services.render import (
    ImageConfig,
    _load_font,
    _stroke_width,
    calculate_line_positions,
    canvas_size,
    find_cjk_font,
    render_image,
    save_image,
)


@pytest.fixture(autouse=True)
def fresh_font_lookup():
    find_cjk_font.cache_clear()
    yield
    find_cjk_font.cache_clear()


class TestImageConfig:
    def test_defaults(self):
        config = ImageConfig()
        assert config.chars_per_line == 18
        assert config.font_size == 32
        assert config.line_spacing == 1.5
        assert config.padding == 42

    def test_budget_counts_wide_glyphs(self):
        assert ImageConfig(chars_per_line=10).max_width_units == 20

    @pytest.mark.parametrize("kwargs", [
        {"chars_per_line": 0},
        {"chars_per_line": -5},
        {"font_size": 0},
        {"padding": -1},
        {"line_spacing": 0},
    ])
    def test_rejects_values_that_give_an_empty_canvas(self, kwargs):
        with pytest.raises(ValueError):
            ImageConfig(**kwargs)

    def test_zero_padding_allowed(self):
        assert ImageConfig(padding=0).padding == 0


class TestFontLookup:
    def test_known_path_preferred(self, monkeypatch, tmp_path):
        font = tmp_path / "NotoSansCJK-Regular.ttc"
        font.write_bytes(b"")
        monkeypatch.setattr(render, "CJK_FONT_CANDIDATES", (str(tmp_path / "missing.ttc"), str(font)))
        assert find_cjk_font() == str(font)

    def test_falls_back_to_fontconfig(self, monkeypatch):
        monkeypatch.setattr(render, "CJK_FONT_CANDIDATES", ())
        monkeypatch.setattr(render.shutil, "which", lambda cmd: "/usr/bin/fc-list")

        def fake_run(args, **kwargs):
            assert args == ["fc-list", ":lang=zh", "file"]
            return subprocess.CompletedProcess(args, 0, stdout="/b/wqy.ttc: \n/a/noto.otf: \n\n")

        monkeypatch.setattr(render.subprocess, "run", fake_run)
        assert find_cjk_font() == "/a/noto.otf"

    def test_fontconfig_failure_tolerated(self, monkeypatch):
        monkeypatch.setattr(render, "CJK_FONT_CANDIDATES", ())
        monkeypatch.setattr(render.shutil, "which", lambda cmd: "/usr/bin/fc-list")

        def fake_run(args, **kwargs):
            raise subprocess.CalledProcessError(1, args)

        monkeypatch.setattr(render.subprocess, "run", fake_run)
        assert find_cjk_font() is None

    def test_warns_when_nothing_found(self, monkeypatch, caplog):
        monkeypatch.setattr(render, "CJK_FONT_CANDIDATES", ())
        monkeypatch.setattr(render.shutil, "which", lambda cmd: None)
        with caplog.at_level("WARNING", logger="text2longimage.services.render"):
            assert find_cjk_font() is None
        assert "No CJK font found" in caplog.text

    def test_configured_font_path_skips_lookup(self, monkeypatch, tmp_path):
        monkeypatch.setattr(render, "find_cjk_font", lambda: pytest.fail("lookup ran"))
        with pytest.raises(OSError):
            _load_font(ImageConfig(font_path=str(tmp_path / "missing.ttf")))

    def test_bundled_font_when_nothing_found(self, monkeypatch):
        monkeypatch.setattr(render, "find_cjk_font", lambda: None)
        assert _load_font(ImageConfig()) is not None


class TestLayout:
    def test_line_positions(self):
        positions = calculate_line_positions(["a", "", "b"], ImageConfig())
        assert [(p.x, p.y) for p in positions] == [(42, 42.0), (42, 90.0), (42, 138.0)]
        assert [p.text for p in positions] == ["a", "", "b"]

    def test_no_lines(self):
        assert calculate_line_positions([], ImageConfig()) == []

    def test_canvas_size(self):
        assert canvas_size(3, ImageConfig()) == (660, 228)

    def test_canvas_size_rounds_up(self):
        config = ImageConfig(font_size=11, line_spacing=1.5, padding=0, chars_per_line=1)
        assert canvas_size(1, config) == (11, 17)


class TestStrokeWidth:
    @pytest.mark.parametrize("weight, expected", [
        ("400", 0),
        ("normal", 0),
        ("600", 1),
        ("700", 1),
        ("bold", 1),
    ])
    def test_stroke_width(self, weight, expected):
        assert _stroke_width(weight) == expected


class TestRenderImage:
    def test_size_follows_line_count(self):
        image = render_image("hello world", ImageConfig())
        assert image.size == (660, 132)
        assert image.mode == "RGB"

    def test_wraps_at_twice_chars_per_line(self):
        config = ImageConfig(chars_per_line=2)
        # Budget is 4 width units: "你好" fits, "世界" goes to line two.
        image = render_image("你好世界", config)
        assert image.size == canvas_size(2, config)

    def test_light_background(self):
        image = render_image("hello", ImageConfig())
        assert image.getpixel((0, 0)) == (255, 255, 255)

    def test_dark_background(self):
        image = render_image("hello", ImageConfig(), dark_mode=True)
        assert image.getpixel((0, 0)) == (0x22, 0x22, 0x22)

    def test_text_is_drawn(self):
        image = render_image("HELLO", ImageConfig())
        colors = image.getcolors(maxcolors=1 << 16)
        assert colors is not None and len(colors) > 1

    def test_distinct_cjk_glyphs_differ(self):
        if find_cjk_font() is None:
            pytest.skip("no CJK font installed")
        first = render_image("你", ImageConfig())
        second = render_image("界", ImageConfig())
        assert ImageChops.difference(first, second).getbbox() is not None


class TestSaveImage:
    def test_writes_png(self, tmp_path):
        path = save_image(render_image("hi", ImageConfig()), tmp_path / "out")
        assert path.exists()
        assert path.name.startswith("changweibo")
        assert path.suffix == ".png"
        with Image.open(path) as saved:
            assert saved.format == "PNG"
