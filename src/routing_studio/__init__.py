"""routing-studio: guided editing and validation for model routing documents."""

__version__ = "0.1.0"
