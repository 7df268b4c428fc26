"""
User model for authentication and authorization.

Users are keyed by username. The is_admin flag gates the admin-only routes.
"""

from sqlalchemy import Column, String, Boolean, Integer, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class User(Base):
    """
    User account.

    The password column holds a bcrypt hash and is never returned by the API.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True, index=True)
    password = Column(String, nullable=False)

    # User profile
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False)

    is_admin = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")

    @property
    def jobs(self):
        """Ids of the jobs this user applied to."""
        return sorted(application.job_id for application in self.applications)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"


class Application(Base):
    """A user's application to a job."""
    __tablename__ = "applications"

    username = Column(String(25), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(username='{self.username}', job_id={self.job_id})>"
