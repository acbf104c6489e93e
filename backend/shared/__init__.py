"""Helpers shared across the add-on."""
