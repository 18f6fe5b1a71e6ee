"""Directory watcher: run eligible scripts one at a time, then delete them."""
