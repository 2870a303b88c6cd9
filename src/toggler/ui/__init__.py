"""User interface implementations."""
