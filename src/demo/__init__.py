"""Self-contained demonstration: seed directories, copy, then a bounded watch."""
