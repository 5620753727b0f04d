"""
Company, Role and User Models
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON, Uuid, UniqueConstraint
import uuid
from .database import Base
from utils.helpers import utc_now

class Company(Base):
    """Company model - root tenant boundary"""
    __tablename__ = "companies"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    admin_user_id = Column(Uuid, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Company {self.name}>"

class Role(Base):
    """Company-scoped role carrying a permission list"""
    __tablename__ = "roles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    permissions = Column(JSON, nullable=False, default=list)  # list of Permission values
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    __table_args__ = (
        UniqueConstraint("company_id", "name", name="uq_role_company_name"),
    )

    def __repr__(self):
        return f"<Role {self.name}>"

class User(Base):
    """User model with authentication; employees carry the richer profile fields"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255))
    department = Column(String(255))
    company_id = Column(Uuid, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    role_id = Column(Uuid, ForeignKey("roles.id"), index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def __repr__(self):
        return f"<User {self.email}>"
