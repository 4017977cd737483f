"""Command line interface for wikimap."""
