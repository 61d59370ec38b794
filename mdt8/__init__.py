"""MDT8: a small command-line meditation time tracker."""

__version__ = "0.2.0"

__all__ = ["__version__"]
