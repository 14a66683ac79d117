"""Schema registry and type resolution for RPC API documentation."""

__version__ = "0.4.0"
