"""Base domain building blocks."""
