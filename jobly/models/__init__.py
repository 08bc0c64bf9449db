"""
Database models package.
"""

from jobly.models.company import Company, CompanyField
from jobly.models.job import Job, JobField

__all__ = ["Company", "CompanyField", "Job", "JobField"]
