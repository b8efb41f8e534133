"""
Feature modules for the run challenge.

Each feature is a self-contained module with:
- models.py - Domain dataclasses
- schemas.py - Pydantic schemas for raw rows
- service.py - Business logic
- repository.py - Data access (optional)
"""
