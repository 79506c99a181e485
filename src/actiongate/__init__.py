"""ActionGate - single-endpoint action dispatch with bearer-token auth."""

__version__ = "0.1.0"
