"""FastAPI dependencies wiring sessions, the current user and application services."""
