"""Command line interface for catalogsnap."""
