import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from .base import Base


class UserRole(enum.Enum):
    student = "student"
    instructor = "instructor"
    admin = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    role = Column(Enum(UserRole, name="user_role_enum"), default=UserRole.student, server_default="student", nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    enrolled_courses = relationship(
        "Course",
        secondary="user_course",
        back_populates="enrolled_students",
    )

    created_courses = relationship(
        "Course",
        back_populates="creator",
    )

    purchases = relationship(
        "CoursePurchase",
        back_populates="user",
    )

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, email={self.email})>"
