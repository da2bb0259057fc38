"""
I/O models for API requests and responses.

Pydantic schemas defining the contract between the HTTP API and its clients.
Entities are converted with ``model_validate`` (``from_attributes``).
"""
