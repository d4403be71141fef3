"""CLI commands for Devobox."""
