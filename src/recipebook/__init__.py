"""Shopping list aggregation for household meal plans."""

__version__ = "0.1.0"
