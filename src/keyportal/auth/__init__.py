"""Authentication helpers.

Learn: Two unrelated credentials live here:
1. Admins → email/password, answered with the shared admin bearer token
2. Users → an API key issued once at registration

The admin bearer token is a single static secret from configuration,
not a per-admin session.
"""
