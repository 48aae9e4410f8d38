# repositories/interfaces/__init__.py
"""
Repository interfaces package
"""
from .course_repository import CourseRepositoryInterface

__all__ = [
    "CourseRepositoryInterface",
]
