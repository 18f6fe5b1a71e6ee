"""Directory listing and file metadata capability with swappable backends."""
