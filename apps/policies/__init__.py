"""Mutable application settings, including the franchise fee policy."""
