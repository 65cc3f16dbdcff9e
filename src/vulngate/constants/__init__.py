"""Shared constants for Vulngate."""
