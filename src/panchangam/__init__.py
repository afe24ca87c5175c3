"""Magizh Panchangam: Tamil almanac model, timing resolution and fetch orchestration."""

__version__ = "0.1.0"
