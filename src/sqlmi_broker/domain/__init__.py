"""Domain layer: managed instance model, errors and ports."""
