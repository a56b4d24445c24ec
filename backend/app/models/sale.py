"""SQLAlchemy model definitions for sales."""

from __future__ import annotations

import enum
import uuid

from sqlalchemy import CheckConstraint, Column, Enum, Index, Numeric, String

from ..database import Base
from ..db_types import GUID
from .mixins import TimestampMixin


class SalePlan(str, enum.Enum):
    """Plans a customer can buy."""

    MONTHLY = "Monthly"
    BIMONTHLY = "Bimonthly"
    QUARTERLY = "Quarterly"
    FOUR_MONTHLY = "Four-monthly"
    SEMIANNUAL = "Semiannual"
    ANNUAL = "Annual"


class SaleKind(str, enum.Enum):
    """Payment kind: a single charge or a recurring subscription-style charge."""

    ONE_TIME = "OneTime"
    RECURRING = "Recurring"


SALE_PLAN_ENUM = Enum(
    SalePlan,
    name="sale_plan_enum",
    values_callable=lambda enum_cls: [member.value for member in enum_cls],
    native_enum=False,
    create_constraint=True,
    validate_strings=True,
    length=20,
)

SALE_KIND_ENUM = Enum(
    SaleKind,
    name="sale_kind_enum",
    values_callable=lambda enum_cls: [member.value for member in enum_cls],
    native_enum=False,
    create_constraint=True,
    validate_strings=True,
    length=20,
)


class Sale(TimestampMixin, Base):
    """Represents one sale transaction for a named customer."""

    __tablename__ = "sales"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_sales_amount_positive"),
        {"comment": "Sales registered by the sales tracker"},
    )

    id = Column(
        "sale_id",
        GUID(),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier of the sale",
    )
    name = Column(String(255), nullable=False, comment="Customer name")
    plan = Column(SALE_PLAN_ENUM, nullable=False, comment="Plan sold")
    kind = Column(
        SALE_KIND_ENUM,
        nullable=False,
        default=SaleKind.ONE_TIME,
        server_default=SaleKind.ONE_TIME.value,
        comment="Payment kind: OneTime (single charge) or Recurring",
    )
    amount = Column(Numeric(10, 2), nullable=False, comment="Sale amount")


Index("sales_created_at_idx", Sale.created_at.desc())
Index("sales_plan_idx", Sale.plan)
Index("sales_kind_idx", Sale.kind)
