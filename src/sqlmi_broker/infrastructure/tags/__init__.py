"""Tag validation."""
