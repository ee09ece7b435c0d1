"""medialist: a personal movie and series tracking list."""

__version__ = "0.3.0"
