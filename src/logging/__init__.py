"""Logging setup: formatters, rotating handler, per-process context."""
