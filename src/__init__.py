"""forkwatch — process spawning and reaping workflows (directory watcher, parallel copier)."""
