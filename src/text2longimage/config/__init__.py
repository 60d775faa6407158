"""Configuration management for text2longimage."""

from __future__ import annotations

from text2longimage.config.settings import Settings

__all__ = ["Settings"]
