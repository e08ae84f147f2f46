"""
Pydantic schema definitions for API payloads.

Schemas are separated from the SQL in the service layer so the wire
representation (camelCase JSON) can differ from the stored columns.
"""
