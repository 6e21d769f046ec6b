"""Quiver CLI: terminal commands for listing, validating and running skills."""
