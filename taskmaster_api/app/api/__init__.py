"""
API package containing the HTTP routes.

``router`` aggregates the domain routers (auth, tasks, users) under the
``/api`` prefix; ``deps`` holds the FastAPI dependencies that hand the
application-owned store and services to the endpoints.
"""
