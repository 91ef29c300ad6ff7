"""Pydantic schemas for Adaptiq."""
