"""Command line interface for kubeblinkt."""
