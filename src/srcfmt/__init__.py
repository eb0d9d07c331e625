"""srcfmt - incremental source reformatting with a content-hash cache."""

__version__ = "0.1.0"
