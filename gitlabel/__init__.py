"""Create, update and remove labels across GitHub repositories."""

__version__ = '1.0.0'
