"""Shared core types."""
