"""
Shared module package.

Contains cross-cutting concerns used across the application:
- Error handling and mapping
- Broker API version negotiation
- Security headers and rate limiting
- Logging configuration
"""
