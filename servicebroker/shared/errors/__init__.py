"""
Shared error handling package.

Registers the handlers that hand raised errors to the broker's
outcome mapper, so every failure leaves the API in the same shape.
"""
