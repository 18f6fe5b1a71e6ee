"""Parallel copier: one child process per file, then a drain loop."""
