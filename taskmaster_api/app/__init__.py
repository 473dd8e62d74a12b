"""
Application package initializer.

The application is split into ``core`` (configuration, logging, errors,
security, the in-memory store and the catalogue of known defects),
``schemas`` (Pydantic request/response models), ``services`` (business
logic) and ``api`` (routers).  ``main`` wires them together.
"""

from .main import app  # noqa: F401
