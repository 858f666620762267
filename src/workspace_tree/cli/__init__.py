"""Command-line interface for workspace-tree."""
