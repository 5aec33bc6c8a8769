"""Currency rate import for the store's pluggable currency-import framework."""

__version__ = "0.1.0"
