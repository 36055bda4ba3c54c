"""Command line interface for AgeCompute."""
