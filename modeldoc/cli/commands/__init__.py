"""CLI command modules for modeldoc."""
