"""Shared building blocks: base models, middleware and health checks."""
