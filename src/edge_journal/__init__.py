"""Trading-journal analytics: descriptive statistics over logged trades."""

__version__ = "0.1.0"
