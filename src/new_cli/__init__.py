"""Create files from user templates and open them in the platform editor."""

__version__ = "0.1.0"
