"""
Broker bounded context: domain layer.

This module contains the domain model for:
- Catalog and service definitions
- Service instance provisioning requests and responses
- Service instance binding requests and responses
- The closed set of broker failure conditions
"""
