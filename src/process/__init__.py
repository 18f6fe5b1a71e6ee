"""Process primitives: fork/exec spawning and waitpid-based reaping."""
