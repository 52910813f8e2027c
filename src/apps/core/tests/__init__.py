"""Core app tests package."""
