"""api/ -- FastAPI application and REST routes for the TODO API."""
