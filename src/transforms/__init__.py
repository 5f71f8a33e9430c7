"""Row-level catalog transforms: validation, dedup, and reference resolution."""
