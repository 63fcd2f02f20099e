"""Task tracker with working-day auto-scheduling."""

__version__ = "1.0.0"
