"""Domain and persistence services."""
