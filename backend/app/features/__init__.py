"""
Feature modules for Trail & Events.

Each feature is a self-contained module with:
- models.py / dates.py - Domain model
- schemas.py - Pydantic schemas
- service.py - Orchestration (optional)
- __init__.py - Public surface of the feature
"""
