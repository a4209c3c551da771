"""Pydantic schemas for the config sections."""
