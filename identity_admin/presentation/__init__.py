"""Presentation layer - HTTP transport."""
