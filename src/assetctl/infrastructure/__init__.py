"""Infrastructure layer — filesystem, transformation libraries, watcher, dev server."""
