"""Reading tracker backend: students, reading progress and a book catalog."""

__version__ = "0.1.0"
