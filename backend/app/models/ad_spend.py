"""SQLAlchemy model definitions for advertising spend."""

from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Column, Index, Numeric, String

from ..database import Base
from ..db_types import GUID
from .mixins import TimestampMixin


class AdSpend(TimestampMixin, Base):
    """Represents one advertising expenditure (paid traffic)."""

    __tablename__ = "ad_spend"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_ad_spend_amount_positive"),
        {"comment": "Paid traffic spend registered by the sales tracker"},
    )

    id = Column(
        "ad_spend_id",
        GUID(),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier of the spend",
    )
    description = Column(
        String(255),
        nullable=False,
        comment="Spend description, e.g. Facebook Ads",
    )
    amount = Column(Numeric(10, 2), nullable=False, comment="Amount spent")


Index("ad_spend_created_at_idx", AdSpend.created_at.desc())
