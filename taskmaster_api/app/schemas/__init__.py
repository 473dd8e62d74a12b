"""
Pydantic schema definitions for API payloads.

Tasks and users each define their own models for request and response
bodies.  Schemas are kept apart from the store records so the wire
format (camelCase, no password fields) does not leak into storage.
"""
