"""Control plane provider implementations."""
