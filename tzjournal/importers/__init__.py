"""Adapters that turn external files into journal records."""
