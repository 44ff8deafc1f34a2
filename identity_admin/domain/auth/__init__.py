"""Auth bounded context - users, user groups, roles."""
