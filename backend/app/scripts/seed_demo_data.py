"""CLI utility to load demonstration sales and ad spend records."""

from __future__ import annotations

import argparse
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from .. import models
from ..database import session_scope
from ..services import AdSpendService, ReportService, SaleService

LOGGER = logging.getLogger(__name__)

DEMO_SALES = [
    {"name": "João Silva", "plan": models.SalePlan.MONTHLY, "amount": Decimal("150.00")},
    {"name": "Maria Santos", "plan": models.SalePlan.QUARTERLY, "amount": Decimal("400.00")},
    {"name": "Pedro Oliveira", "plan": models.SalePlan.ANNUAL, "amount": Decimal("1200.00")},
    {"name": "Ana Costa", "plan": models.SalePlan.SEMIANNUAL, "amount": Decimal("750.00")},
    {"name": "Carlos Souza", "plan": models.SalePlan.BIMONTHLY, "amount": Decimal("280.00")},
]

DEMO_AD_SPEND = [
    {"description": "Facebook Ads - January campaign", "amount": Decimal("500.00")},
    {"description": "Google Ads - Search", "amount": Decimal("300.00")},
    {"description": "Instagram Ads - Stories", "amount": Decimal("200.00")},
]


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Insert demonstration sales and ad spend records into the configured database."
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Insert the records even when the tables already hold data.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show every inserted record.",
    )
    return parser.parse_args(argv)


def seed_demo_data(db: Session, *, force: bool = False) -> int:
    """Insert the demo rows and return how many were written."""

    has_data = (
        db.query(models.Sale.id).first() is not None
        or db.query(models.AdSpend.id).first() is not None
    )
    if has_data and not force:
        LOGGER.info("Tables already contain data; skipping demo seed")
        return 0

    inserted = 0
    for payload in DEMO_SALES:
        sale = SaleService.create_sale(db, payload)
        LOGGER.debug("Inserted sale %s for %s", sale.id, sale.name)
        inserted += 1
    for payload in DEMO_AD_SPEND:
        record = AdSpendService.create_ad_spend(db, payload)
        LOGGER.debug("Inserted ad spend %s (%s)", record.id, record.description)
        inserted += 1
    return inserted


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    with session_scope() as db:
        inserted = seed_demo_data(db, force=args.force)
        stats = ReportService.dashboard_stats(db)

    LOGGER.info("Inserted %s demo records", inserted)
    LOGGER.info(
        "Dashboard: sales=%s ad_spend=%s net_profit=%s roi=%s%%",
        stats["total_sales"],
        stats["total_ad_spend"],
        stats["net_profit"],
        stats["roi"],
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
