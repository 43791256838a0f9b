"""Adapters that connect the core to files, config formats, and the CLI."""
