"""Arena champion progress tracker."""

__version__ = "0.3.0"
