"""Create sales and ad spend tables, update triggers and reporting views.

Revision ID: 20260101_0001
Revises:
Create Date: 2026-01-01 00:00:00.000000
"""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from alembic import op


revision = "20260101_0001"
down_revision = None
branch_labels = None
depends_on = None


SALE_PLAN_ENUM = sa.Enum(
    "Monthly",
    "Bimonthly",
    "Quarterly",
    "Four-monthly",
    "Semiannual",
    "Annual",
    name="sale_plan_enum",
    native_enum=False,
    create_constraint=True,
    length=20,
)
SALE_KIND_ENUM = sa.Enum(
    "OneTime",
    "Recurring",
    name="sale_kind_enum",
    native_enum=False,
    create_constraint=True,
    length=20,
)

VIEWS = {
    "vw_sales_summary": """
        CREATE VIEW vw_sales_summary AS
        SELECT
            COUNT(*) AS total_sales,
            COALESCE(SUM(amount), 0) AS total_amount,
            COALESCE(AVG(amount), 0) AS average_amount,
            MIN(created_at) AS first_sale_at,
            MAX(created_at) AS last_sale_at
        FROM sales
    """,
    "vw_sales_by_plan": """
        CREATE VIEW vw_sales_by_plan AS
        SELECT
            plan,
            COUNT(*) AS quantity,
            SUM(amount) AS total_amount,
            AVG(amount) AS average_amount
        FROM sales
        GROUP BY plan
        ORDER BY quantity DESC, plan
    """,
    "vw_ad_spend_summary": """
        CREATE VIEW vw_ad_spend_summary AS
        SELECT
            COUNT(*) AS total_records,
            COALESCE(SUM(amount), 0) AS total_amount,
            MIN(created_at) AS first_spend_at,
            MAX(created_at) AS last_spend_at
        FROM ad_spend
    """,
    "vw_dashboard": """
        CREATE VIEW vw_dashboard AS
        SELECT
            s.total_sales,
            s.sales_count,
            s.average_sale,
            a.total_ad_spend,
            a.ad_spend_count,
            s.total_sales - a.total_ad_spend AS net_profit,
            CASE
                WHEN a.total_ad_spend > 0
                THEN ((s.total_sales - a.total_ad_spend) * 100.0) / a.total_ad_spend
                ELSE 0
            END AS roi_percentage
        FROM (
            SELECT
                COALESCE(SUM(amount), 0) AS total_sales,
                COUNT(*) AS sales_count,
                COALESCE(AVG(amount), 0) AS average_sale
            FROM sales
        ) s
        CROSS JOIN (
            SELECT
                COALESCE(SUM(amount), 0) AS total_ad_spend,
                COUNT(*) AS ad_spend_count
            FROM ad_spend
        ) a
    """,
}


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Date and time the record was registered",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
            comment="Date and time of the last modification",
        ),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    dialect = bind.dialect.name
    guid_type = postgresql.UUID(as_uuid=True) if dialect == "postgresql" else sa.CHAR(36)

    def index_exists(table: str, index: str) -> bool:
        return index in {idx["name"] for idx in inspector.get_indexes(table)}

    if not inspector.has_table("sales"):
        op.create_table(
            "sales",
            sa.Column("sale_id", guid_type, primary_key=True, comment="Unique identifier of the sale"),
            sa.Column("name", sa.String(255), nullable=False, comment="Customer name"),
            sa.Column("plan", SALE_PLAN_ENUM, nullable=False, comment="Plan sold"),
            sa.Column(
                "kind",
                SALE_KIND_ENUM,
                nullable=False,
                server_default="OneTime",
                comment="Payment kind: OneTime (single charge) or Recurring",
            ),
            sa.Column("amount", sa.Numeric(10, 2), nullable=False, comment="Sale amount"),
            *_timestamp_columns(),
            sa.CheckConstraint("amount > 0", name="ck_sales_amount_positive"),
            comment="Sales registered by the sales tracker",
        )
    if not index_exists("sales", "sales_created_at_idx"):
        op.create_index("sales_created_at_idx", "sales", [sa.text("created_at DESC")])
    if not index_exists("sales", "sales_plan_idx"):
        op.create_index("sales_plan_idx", "sales", ["plan"])
    if not index_exists("sales", "sales_kind_idx"):
        op.create_index("sales_kind_idx", "sales", ["kind"])

    if not inspector.has_table("ad_spend"):
        op.create_table(
            "ad_spend",
            sa.Column(
                "ad_spend_id", guid_type, primary_key=True, comment="Unique identifier of the spend"
            ),
            sa.Column(
                "description",
                sa.String(255),
                nullable=False,
                comment="Spend description, e.g. Facebook Ads",
            ),
            sa.Column("amount", sa.Numeric(10, 2), nullable=False, comment="Amount spent"),
            *_timestamp_columns(),
            sa.CheckConstraint("amount > 0", name="ck_ad_spend_amount_positive"),
            comment="Paid traffic spend registered by the sales tracker",
        )
    if not index_exists("ad_spend", "ad_spend_created_at_idx"):
        op.create_index("ad_spend_created_at_idx", "ad_spend", [sa.text("created_at DESC")])

    if dialect == "postgresql":
        op.execute(
            """
            CREATE OR REPLACE FUNCTION set_updated_at_timestamp()
            RETURNS TRIGGER AS $$
            BEGIN
                NEW.updated_at = GREATEST(
                    clock_timestamp(),
                    OLD.updated_at + INTERVAL '1 microsecond'
                );
                RETURN NEW;
            END;
            $$ LANGUAGE plpgsql;
            """
        )
        for table in ("sales", "ad_spend"):
            op.execute(
                f"""
                DROP TRIGGER IF EXISTS {table}_set_updated_at ON {table};
                CREATE TRIGGER {table}_set_updated_at
                BEFORE UPDATE ON {table}
                FOR EACH ROW
                EXECUTE FUNCTION set_updated_at_timestamp();
                """
            )

    for name, definition in VIEWS.items():
        op.execute(f"DROP VIEW IF EXISTS {name}")
        op.execute(definition)


def downgrade() -> None:
    bind = op.get_bind()
    dialect = bind.dialect.name

    for name in reversed(list(VIEWS)):
        op.execute(f"DROP VIEW IF EXISTS {name}")

    if dialect == "postgresql":
        op.execute("DROP TRIGGER IF EXISTS ad_spend_set_updated_at ON ad_spend")
        op.execute("DROP TRIGGER IF EXISTS sales_set_updated_at ON sales")
        op.execute("DROP FUNCTION IF EXISTS set_updated_at_timestamp()")

    op.drop_index("ad_spend_created_at_idx", table_name="ad_spend")
    op.drop_table("ad_spend")
    op.drop_index("sales_kind_idx", table_name="sales")
    op.drop_index("sales_plan_idx", table_name="sales")
    op.drop_index("sales_created_at_idx", table_name="sales")
    op.drop_table("sales")
