"""
Top-level package for the TaskMaster Pro API.

``taskmaster_api.app`` holds the FastAPI application and
``taskmaster_api.client`` a small HTTP client for it.
"""

__all__ = []
