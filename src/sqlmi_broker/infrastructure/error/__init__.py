"""Error handling infrastructure."""
