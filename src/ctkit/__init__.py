"""ctkit — content-type definitions and record validation."""

__version__ = "0.1.0"
