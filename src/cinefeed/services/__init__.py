"""Feed building services."""
