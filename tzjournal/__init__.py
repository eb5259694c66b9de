"""TZ Journal - a local trading journal for the terminal."""

__version__ = "0.5.0"
