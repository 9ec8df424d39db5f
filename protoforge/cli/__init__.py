"""Command line interface for protoforge."""
