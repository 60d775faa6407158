"""text2longimage -- wrap text for fixed-width long-image rendering."""

__version__ = "0.3.0"
