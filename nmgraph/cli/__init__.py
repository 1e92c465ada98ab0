"""Command implementations for the nmgraph CLI."""
