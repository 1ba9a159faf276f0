"""
Interfaces layer package.

Contains FastAPI routers, Pydantic request/response schemas,
and the mapping of domain outcomes onto HTTP responses.
No business logic belongs here. Routes call use cases and return responses.
"""
