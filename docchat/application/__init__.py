"""Application layer: services and repository adapters."""
