"""Tests for the authors app."""
