"""
Certificate Model
Professional certificates and courses tracked per employee
"""

from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Uuid, Index
import uuid
from .database import Base
from utils.helpers import utc_now
from utils.certificates import CertificateStatus

class Certificate(Base):
    """
    Certificate owned by exactly one user.
    No foreign key on user_id: deleting a user leaves their certificates in place.
    """
    __tablename__ = "certificates"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    company_id = Column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)

    course_name = Column(String(255), nullable=False)
    course_link = Column(String(500))
    organization = Column(String(255))
    certificate_name = Column(String(255))
    level = Column(String(50))  # Beginner, Intermediate, Advanced, Expert
    category = Column(String(100))
    status = Column(String(20), default=CertificateStatus.IN_PROGRESS.value)

    start_date = Column(Date)
    end_date = Column(Date)

    demo = Column(Text)  # demo link or notes
    output = Column(Text)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    __table_args__ = (
        Index("ix_certificates_company_user", "company_id", "user_id"),
    )

    def __repr__(self):
        return f"<Certificate {self.course_name}>"
