"""CLI command groups for worship-log."""
