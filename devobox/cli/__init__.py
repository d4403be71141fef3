"""Command line interface for Devobox."""
