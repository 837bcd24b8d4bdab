"""Pydantic schemas for requests and records crossing the store boundary."""
