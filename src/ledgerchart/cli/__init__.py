"""Command line interface for ledgerchart."""
