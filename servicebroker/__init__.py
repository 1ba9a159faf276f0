"""
Open Service Broker: HTTP control surface for the OSB API.

Application package root. A small service using hexagonal
architecture (ports & adapters).

Bounded contexts:
    - broker: Catalog, service instances and service instance bindings.

Layers:
    - domain: Entities, request/response values, ports (ABCs), errors.
    - application: Use cases, one per broker operation.
    - infrastructure: Adapters implementing domain ports (catalog file, in-memory state).
    - interfaces: FastAPI routers, Pydantic schemas, outcome-to-HTTP mapping.
    - shared: Cross-cutting concerns (errors, security, logging, API version).
"""
