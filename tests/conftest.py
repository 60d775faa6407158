"""Shared test fixtures for text2longimage."""


import pytest


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def tmp_data_dir(tmp_path):
    """Create a temporary data directory."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def english_paragraph() -> str:
    return (
        "The quick brown fox jumps over the lazy dog while the farmer "
        "watches from the porch, wondering why foxes are always so quick."
    )


@pytest.fixture
def cjk_paragraph() -> str:
    return "吾輩は猫である。名前はまだ無い。どこで生れたかとんと見当がつかぬ。"


@pytest.fixture
def mixed_text() -> str:
    return "Hello world\n\n你好，世界！\r\nこんにちは\rplain english line"
