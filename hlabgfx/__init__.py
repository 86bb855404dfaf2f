"""CPU image filters with bloom, and a small ray tracer that renders to PNG."""

__version__ = "0.1.0"

__all__ = ["__version__"]