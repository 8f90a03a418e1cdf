"""Interface layer: turns parsed CLI arguments into application commands."""
