"""Identity administration backend.

Users, user groups and roles with optimistic concurrency, an outbox of
domain events and an authorization-first command pipeline.
"""

__version__ = "1.0.0"
