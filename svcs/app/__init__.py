"""Command line driver for SVCS."""
