"""Label compliance engine: compares extracted label text against application data."""

__version__ = "1.0.0"
