"""Workflow engine components.

Provides:
- Settings loaded from .env
- Structured logging
- The workflow registry, step executor and runner
- Mock email tools and a prebuilt follow-up campaign
- A small CLI surface
"""
