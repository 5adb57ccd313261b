"""Time and billing charge calculation engine for field-service visits."""

__version__ = "1.0.0"
