"""
Service layer abstraction.

Each service encapsulates the business logic for a domain, including
the known defects, and works on the store it is given.  Endpoints stay
thin: they only translate between HTTP and service calls.
"""
