from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Company(Base):
    """
    Company that posts jobs. Keyed by an immutable handle.
    """
    __tablename__ = "companies"
    __table_args__ = (
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
    )

    handle = Column(String(25), primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False)
    num_employees = Column(Integer, nullable=True)
    logo_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    jobs = relationship(
        "Job",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="Job.id",
    )

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
