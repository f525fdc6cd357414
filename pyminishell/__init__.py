"""Command-line parsing, variable expansion and built-in commands of a small bash-like shell."""

__version__ = "0.1.0"
__all__ = ["__version__"]