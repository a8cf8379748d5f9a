"""Infrastructure helpers (logging, storage paths)."""
