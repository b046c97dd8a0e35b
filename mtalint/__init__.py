"""Schema and semantic checks for multi-target application descriptors and extensions."""

__version__ = "0.1.0"

__all__ = ["__version__"]