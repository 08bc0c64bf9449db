from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Text, CheckConstraint
from jobly.core.database import Base
from jobly.helpers.sql import UpdatableField


class Job(Base):
    """
    A job posting owned by a company.

    company_handle must reference companies.handle; Postgres enforces the
    constraint and deletes a company's jobs along with it.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False, index=True)
    salary = Column(Integer, CheckConstraint("salary >= 0"), nullable=True)
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"), nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_handle='{self.company_handle}')>"


class JobField(UpdatableField):
    """Job fields that PATCH may change. id and company_handle are fixed."""
    TITLE = ("title", "title")
    SALARY = ("salary", "salary")
    EQUITY = ("equity", "equity")
