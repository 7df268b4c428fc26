"""
Database models package.
"""

from app.models.user import User, Application
from app.models.company import Company
from app.models.job import Job

__all__ = ["User", "Application", "Company", "Job"]
