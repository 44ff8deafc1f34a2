"""Infrastructure layer - adapters для domain ports."""
