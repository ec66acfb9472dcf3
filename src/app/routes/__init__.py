"""
FastAPI Routes.

API 라우트 (REST)
"""

from . import projects, templates

__all__ = ["projects", "templates"]
