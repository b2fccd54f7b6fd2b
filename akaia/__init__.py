"""Command-line tool and Starlette web platform for NEAR-backed extension apps."""

__version__ = "0.1.0"

__all__ = ["__version__"]