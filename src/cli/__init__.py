"""Command-line interface for Reissue."""
