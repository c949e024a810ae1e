"""
Pydantic schema definitions for API payloads.

Request and response models are kept separate from the SQL in the
store so the API representation does not leak persistence details.
"""
