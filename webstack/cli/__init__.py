"""Command line interface for webstack."""
