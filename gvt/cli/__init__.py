"""Command line interface for GVT."""
