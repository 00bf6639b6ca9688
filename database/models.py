"""
SQLAlchemy ORM models for the scheduling tables.

This module defines the tables:
- services: Bookable services with price and duration
- business_settings: Singleton row with the working window and days off
- appointments: Customer reservations for a service on a date and slot

All models use:
- UUID primary keys (auto-generated) except the settings singleton
- TIMESTAMP WITH TIME ZONE for audit fields
- DATE / TIME columns for the calendar day and the slot start
- Proper indexes and constraints

The no-double-booking guarantee lives in the appointments table: an exclusion
constraint over (appointment_date, slot_range) rejects any pending/confirmed
row whose minute range overlaps another on the same day. It needs the
btree_gist extension (see database/init_db.py).
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum as PyEnum
from uuid import UUID, uuid4

from sqlalchemy import (
    ARRAY,
    DATE,
    TIME,
    TIMESTAMP,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy import (
    Enum as SQLEnum,
)
from sqlalchemy.dialects.postgresql import INT4RANGE, ExcludeConstraint, Range
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Name of the exclusion constraint; its violation is the canonical conflict signal
NO_OVERLAP_CONSTRAINT = "excl_appointments_no_overlap"

# Primary key of the only business_settings row
SETTINGS_SINGLETON_ID = 1

# Column sizes of the customer fields on appointments
CUSTOMER_NAME_MAX_LENGTH = 200
CUSTOMER_CONTACT_MAX_LENGTH = 50

# ============================================================================
# Base Class
# ============================================================================


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


# ============================================================================
# Enums
# ============================================================================


class AppointmentStatus(PyEnum):
    """Appointment lifecycle status."""

    PENDING = "pending"        # Reserved, waiting for the business to confirm
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"    # Frees the slot

    def __str__(self):
        return self.value


# Statuses that hold a slot
ACTIVE_STATUSES = (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)


def minute_of_day(value: time) -> int:
    """Minutes elapsed since midnight for a time-of-day."""
    return value.hour * 60 + value.minute


# ============================================================================
# Core Models
# ============================================================================


class Service(Base):
    """
    Service model - Bookable services with price and duration.

    Duration drives the size of every slot offered for the service.
    """

    __tablename__ = "services"

    id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True), primary_key=True, default=uuid4
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0.00"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    appointments: Mapped[list["Appointment"]] = relationship(
        "Appointment", back_populates="service"
    )

    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="check_duration_positive"),
        CheckConstraint("price >= 0", name="check_price_non_negative"),
        Index(
            "idx_services_price_active",
            "price",
            postgresql_where=text("is_active = true"),
        ),
    )

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, name='{self.name}', duration={self.duration_minutes})>"


class BusinessSettings(Base):
    """
    Business settings - working window and days off.

    Exactly one row exists (id = 1). Weekdays follow the calendar-view
    convention: 0=Sunday, 1=Monday, ..., 6=Saturday.
    """

    __tablename__ = "business_settings"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, default=SETTINGS_SINGLETON_ID
    )

    work_start: Mapped[time] = mapped_column(TIME, nullable=False)
    work_end: Mapped[time] = mapped_column(TIME, nullable=False)
    slot_interval_minutes: Mapped[int] = mapped_column(Integer, default=30, nullable=False)

    weekday_off: Mapped[list[int]] = mapped_column(
        ARRAY(Integer), default=list, nullable=False
    )
    specific_days_off: Mapped[list[date]] = mapped_column(
        ARRAY(DATE), default=list, nullable=False
    )

    # Only used to build the outbound WhatsApp link
    whatsapp_number: Mapped[str | None] = mapped_column(String(20), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=datetime.utcnow,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(f"id = {SETTINGS_SINGLETON_ID}", name="check_settings_singleton"),
        CheckConstraint("work_end > work_start", name="check_work_window"),
        CheckConstraint("slot_interval_minutes > 0", name="check_slot_interval_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<BusinessSettings({self.work_start:%H:%M}-{self.work_end:%H:%M}, "
            f"every {self.slot_interval_minutes}min, off={self.weekday_off})>"
        )


# ============================================================================
# Transactional Models
# ============================================================================


class Appointment(Base):
    """
    Appointment model - A reserved slot for one service on one date.

    duration_minutes is copied from the service when the booking is
    committed, so the stored interval never changes if the service is
    edited later. slot_range holds the same interval as minutes since
    midnight [start, end) and backs the exclusion constraint.
    """

    __tablename__ = "appointments"

    id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True), primary_key=True, default=uuid4
    )

    service_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("services.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    customer_name: Mapped[str] = mapped_column(String(CUSTOMER_NAME_MAX_LENGTH), nullable=False)
    customer_contact: Mapped[str] = mapped_column(String(CUSTOMER_CONTACT_MAX_LENGTH), nullable=False)

    # Scheduling
    appointment_date: Mapped[date] = mapped_column(DATE, nullable=False, index=True)
    appointment_time: Mapped[time] = mapped_column(TIME, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    slot_range: Mapped[Range[int]] = mapped_column(INT4RANGE, nullable=False)

    # Note: values_callable ensures SQLAlchemy stores enum .value ("pending")
    status: Mapped[AppointmentStatus] = mapped_column(
        SQLEnum(
            AppointmentStatus,
            name="appointment_status",
            values_callable=lambda x: [e.value for e in x],
        ),
        default=AppointmentStatus.PENDING,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    service: Mapped["Service"] = relationship("Service", back_populates="appointments")

    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="check_appointment_duration_positive"),
        CheckConstraint(
            "length(trim(customer_name)) > 0 AND length(trim(customer_contact)) > 0",
            name="check_customer_fields_present",
        ),
        ExcludeConstraint(
            ("appointment_date", "="),
            ("slot_range", "&&"),
            name=NO_OVERLAP_CONSTRAINT,
            using="gist",
            where=text("status IN ('pending', 'confirmed')"),
        ),
        Index("idx_appointments_date_status", "appointment_date", "status"),
    )

    @staticmethod
    def build_slot_range(start: time, duration_minutes: int) -> Range[int]:
        """Half-open [start, start + duration) range in minutes since midnight."""
        start_minute = minute_of_day(start)
        return Range(start_minute, start_minute + duration_minutes, bounds="[)")

    def __repr__(self) -> str:
        return (
            f"<Appointment(id={self.id}, date={self.appointment_date}, "
            f"time={self.appointment_time:%H:%M}, status='{self.status.value}')>"
        )
