"""Pydantic models shared across the API layer."""
