"""Auth use cases: accounts, users, user groups, roles."""
