import enum
from typing import Optional
from datetime import datetime, timezone
from sqlalchemy import Integer, Float, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import mapped_column, Mapped, relationship

from .base import Base


class PurchaseStatus(enum.Enum):
    pending = "pending"
    completed = "completed"


class CoursePurchase(Base):
    __tablename__ = "course_purchases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id"), nullable=False
    )

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)

    amount: Mapped[float] = mapped_column(Float, nullable=False)

    status: Mapped[PurchaseStatus] = mapped_column(
        Enum(PurchaseStatus, name="purchase_status_enum"),
        nullable=False,
        default=PurchaseStatus.pending,
        server_default="pending",
    )

    # Stripe checkout session id
    payment_id: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, unique=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    user = relationship(
        "User", foreign_keys=[user_id], back_populates="purchases"
    )

    course = relationship(
        "Course", foreign_keys=[course_id], back_populates="purchases"
    )

    def __repr__(self):
        return f"<CoursePurchase {self.payment_id} ({self.status})>"
