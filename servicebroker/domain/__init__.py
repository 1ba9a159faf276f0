"""
Domain layer package.

Contains the broker's request/response values, the error taxonomy
and the port interfaces collaborators implement.
No framework imports, no IO, no side effects.
"""
