"""Persistence for TZ Journal."""
