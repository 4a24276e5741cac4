"""Quote generation for furniture projects.

A quote aggregates the cost breakdowns of all project modules, applies a
percentage discount to the subtotal and adds VAT on the discounted amount:

    discount = subtotal * discount_percent / 100
    tax_amount = (subtotal - discount) * tax_rate / 100
    total_price = subtotal - discount + tax_amount
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING

from .pricing import PricingEngine

if TYPE_CHECKING:
    from ..catalog import Catalog
    from ..entities import Project

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_TAX_RATE",
    "DEFAULT_VALIDITY_DAYS",
    "ClientDetails",
    "Quote",
    "QuoteBreakdown",
    "QuoteStatus",
    "calculate_quote_breakdown",
    "format_currency",
    "generate_quote",
]

DEFAULT_TAX_RATE = 19.0
DEFAULT_VALIDITY_DAYS = 30


class QuoteStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


@dataclass(frozen=True)
class QuoteBreakdown:
    """Project cost summary with discount and tax applied.

    Attributes:
        materials_cost: Sum of module material costs.
        accessories_cost: Sum of module accessory costs.
        processing_cost: Sum of module processing costs.
        labor_cost: Sum of module labor costs.
        subtotal: Sum of the four categories.
        discount: Discount amount taken off the subtotal.
        tax_rate: VAT rate in percent.
        tax_amount: VAT on the discounted subtotal.
        total_price: Amount due.
    """

    materials_cost: float
    accessories_cost: float
    processing_cost: float
    labor_cost: float
    subtotal: float
    discount: float
    tax_rate: float
    tax_amount: float
    total_price: float

    def to_dict(self) -> dict[str, float]:
        return {
            "materials_cost": self.materials_cost,
            "accessories_cost": self.accessories_cost,
            "processing_cost": self.processing_cost,
            "labor_cost": self.labor_cost,
            "subtotal": self.subtotal,
            "discount": self.discount,
            "tax_rate": self.tax_rate,
            "tax_amount": self.tax_amount,
            "total_price": self.total_price,
        }


@dataclass(frozen=True)
class ClientDetails:
    name: str
    email: str = ""
    phone: str = ""

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Client name must not be empty")


@dataclass(frozen=True)
class Quote:
    """A client quote for a project."""

    id: str
    project_id: str
    client_name: str
    client_email: str
    client_phone: str
    created_at: datetime
    valid_until: datetime
    status: QuoteStatus
    breakdown: QuoteBreakdown
    notes: str | None = None

    def is_expired(self, at: datetime | None = None) -> bool:
        """True if the quote is past its validity date at the given time."""
        moment = at if at is not None else datetime.now(self.valid_until.tzinfo)
        return moment > self.valid_until

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "client_name": self.client_name,
            "client_email": self.client_email,
            "client_phone": self.client_phone,
            "created_at": self.created_at.isoformat(),
            "valid_until": self.valid_until.isoformat(),
            "status": self.status.value,
            "breakdown": self.breakdown.to_dict(),
            "notes": self.notes,
        }


def calculate_quote_breakdown(
    project: Project,
    catalog: Catalog,
    discount_percent: float = 0.0,
    engine: PricingEngine | None = None,
    tax_rate: float = DEFAULT_TAX_RATE,
) -> QuoteBreakdown:
    """Aggregate module prices into a discounted, taxed breakdown.

    Module prices are recomputed from the catalog, so stale cached prices
    on the project do not leak into the quote.

    Raises:
        ValueError: If discount_percent is outside 0..100 or tax_rate is
            negative.
    """
    if not 0 <= discount_percent <= 100:
        raise ValueError(
            f"Discount must be between 0 and 100 percent, got {discount_percent}"
        )
    if tax_rate < 0:
        raise ValueError(f"Tax rate must be non-negative, got {tax_rate}")

    engine = engine or PricingEngine()
    totals = engine.calculate_project_breakdown(project.modules, catalog)
    subtotal = totals.total
    discount = subtotal * discount_percent / 100
    taxable = subtotal - discount
    tax_amount = taxable * tax_rate / 100

    return QuoteBreakdown(
        materials_cost=totals.materials,
        accessories_cost=totals.accessories,
        processing_cost=totals.processing,
        labor_cost=totals.labor,
        subtotal=subtotal,
        discount=discount,
        tax_rate=tax_rate,
        tax_amount=tax_amount,
        total_price=taxable + tax_amount,
    )


def _quote_id(project_id: str, created_at: datetime) -> str:
    suffix = str(int(created_at.timestamp() * 1000))[-4:]
    return f"Q-{project_id[:4]}-{suffix}"


def generate_quote(
    project: Project,
    catalog: Catalog,
    client: ClientDetails,
    discount_percent: float = 0.0,
    notes: str | None = None,
    now: datetime | None = None,
    validity_days: int = DEFAULT_VALIDITY_DAYS,
    engine: PricingEngine | None = None,
    tax_rate: float = DEFAULT_TAX_RATE,
) -> Quote:
    """Create a draft quote for a project.

    Args:
        project: Project to quote.
        catalog: Reference data for pricing.
        client: Who the quote is addressed to.
        discount_percent: Discount on the subtotal, 0..100.
        notes: Free-form notes printed on the quote.
        now: Creation time; defaults to the current time.
        validity_days: Days until the quote expires.
        engine: Pricing engine; defaults to one with the standard rates.
        tax_rate: VAT rate in percent.

    Returns:
        Quote with status DRAFT.
    """
    if validity_days < 0:
        raise ValueError(f"Validity must be non-negative, got {validity_days} days")

    created_at = now or datetime.now()
    breakdown = calculate_quote_breakdown(
        project, catalog, discount_percent, engine=engine, tax_rate=tax_rate
    )
    quote = Quote(
        id=_quote_id(project.id, created_at),
        project_id=project.id,
        client_name=client.name,
        client_email=client.email,
        client_phone=client.phone,
        created_at=created_at,
        valid_until=created_at + timedelta(days=validity_days),
        status=QuoteStatus.DRAFT,
        breakdown=breakdown,
        notes=notes,
    )
    logger.debug(
        f"Generated quote {quote.id} for project '{project.id}' "
        f"total {breakdown.total_price:.2f}"
    )
    return quote


def format_currency(amount: float, currency: str = "RON") -> str:
    """Format an amount with Romanian grouping, e.g. ``1.071,00 RON``."""
    grouped = f"{amount:,.2f}"
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{localized} {currency}"
