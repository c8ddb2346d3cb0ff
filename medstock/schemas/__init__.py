"""
Pydantic schemas for snapshot records and engine results.
"""
