"""Data management: pydantic schemas for the adjudication engine."""
