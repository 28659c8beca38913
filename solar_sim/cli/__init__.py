"""Command-line host for headless runs."""
