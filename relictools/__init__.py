"""Hex-to-image conversion and read-only views over fragmented and filtered directories."""

__version__ = "0.1.0"
__all__ = ["antink", "baymax", "hexed"]