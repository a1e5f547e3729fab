"""Package version, shared by packaging, settings and the package namespace."""

__version__ = "0.3.0"
