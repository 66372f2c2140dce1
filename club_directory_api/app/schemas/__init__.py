"""
Pydantic schema definitions for API payloads.

Schemas are separated from the in‑memory store so that the API
representation of a member can evolve independently of storage.
"""
