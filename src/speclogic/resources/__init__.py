"""Packaged resources (library defaults)."""
