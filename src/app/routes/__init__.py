"""
FastAPI Routes.

페이지 라우트 (HTML) + 번들 스크립트 라우트 (JS)
"""

from . import pages, templates

__all__ = ["pages", "templates"]
