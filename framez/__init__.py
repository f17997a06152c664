"""Async framing of byte streams with reusable buffers and pluggable codecs."""

__version__ = "0.3.1"