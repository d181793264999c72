"""Persistence layer: store adapters, versioned schemas and repositories."""
