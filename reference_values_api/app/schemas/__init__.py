"""
Pydantic schema definitions for API payloads and the persisted file.
"""
