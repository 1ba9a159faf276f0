"""
Infrastructure adapters for the broker bounded context.

Each adapter implements a domain port (ABC): the catalog is read from
configuration, service instances and bindings are held in process memory.
"""
