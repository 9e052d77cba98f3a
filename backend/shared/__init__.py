"""Helpers shared across packages (database client, small utilities)."""
