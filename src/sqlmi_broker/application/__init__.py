"""Application layer: provisioning use case and its collaborators."""
