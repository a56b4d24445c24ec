"""Command line utilities for the sales tracker backend."""
