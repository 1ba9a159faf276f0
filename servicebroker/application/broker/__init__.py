"""
Application layer for the broker bounded context.

Use cases resolve catalog entries and hand requests to the
collaborator ports. No framework or infrastructure imports allowed.
"""
