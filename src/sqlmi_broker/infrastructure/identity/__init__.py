"""Managed identity assignment."""
