"""Command-line interface for Vulngate."""
