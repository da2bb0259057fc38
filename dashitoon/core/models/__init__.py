"""
Domain and I/O models.

- domain/: enums, the content rating rubric and domain events
- io/: Pydantic request/response schemas for the HTTP API
"""
