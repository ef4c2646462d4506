"""
CRUD operations (Create, Read, Update, Delete) for companies and jobs.

This layer owns all SQL and hands back plain dicts, following the
Repository pattern.
"""

from app.crud import company, job

__all__ = ["company", "job"]
