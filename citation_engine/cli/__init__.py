"""Command line interface for the citation engine."""
