"""Core functionality for Devobox: configuration and build workflow."""
