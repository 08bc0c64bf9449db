from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from jobly.core.database import Base
from jobly.helpers.sql import UpdatableField


class Company(Base):
    """
    A company that posts jobs, identified by a human-readable handle.
    """
    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    description = Column(Text, nullable=False, default="")
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"), nullable=True)
    logo_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"


class CompanyField(UpdatableField):
    """Company fields that PATCH may change."""
    NAME = ("name", "name")
    DESCRIPTION = ("description", "description")
    NUM_EMPLOYEES = ("numEmployees", "num_employees")
    LOGO_URL = ("logoUrl", "logo_url")
