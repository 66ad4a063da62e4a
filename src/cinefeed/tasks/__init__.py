"""Batch jobs run by the command line entry point."""
