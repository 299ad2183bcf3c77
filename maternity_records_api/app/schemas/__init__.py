"""
Pydantic schema definitions for the JSON API.

Schemas are separated from the store's ``Document`` dataclass to
decouple the API representation from persistence.
"""
