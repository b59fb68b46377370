"""Building blocks for generating query code from model descriptions and SQL templates."""

__version__ = "0.1.0"