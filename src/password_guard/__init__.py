"""Rule-based password strength checks with stronger suggestions."""

__version__ = "0.1.0"
