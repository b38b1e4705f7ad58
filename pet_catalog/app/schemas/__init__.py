"""
Pydantic schema definitions for pet values and API payloads.
"""
