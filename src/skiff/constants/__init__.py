"""Shared constants for Skiff."""
