"""Domain layer - pure business logic без залежностей від infrastructure."""
