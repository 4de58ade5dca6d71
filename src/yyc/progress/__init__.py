"""Per-trick and per-path progress tracking."""
