"""Pydantic models describing the response envelope."""
