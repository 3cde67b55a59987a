"""Command line interface for ditakit."""
