"""radiomail - message composition for amateur radio email."""

__version__ = "0.1.0"
