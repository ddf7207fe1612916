"""
Pydantic schema definitions for API payloads and stored records.

Each domain (users, collaboration requests, messages, connections)
defines its own models.  ``*Record`` models are what the storage layer
returns; ``*Read`` models are what the API serialises.  For users the
two differ: ``UserRead`` has no password field.
"""
