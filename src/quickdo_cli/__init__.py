"""quickdo - natural-language task capture and organization for the terminal."""

__version__ = "0.3.0"
