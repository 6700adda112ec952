"""recordcheck — structural and value validation for booking API records."""

__version__ = "0.1.0"
