"""Utility modules for pal functionality."""
