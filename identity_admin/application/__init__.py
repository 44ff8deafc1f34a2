"""Application layer - use cases (CQRS commands / queries)."""
