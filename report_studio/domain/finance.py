"""
Invoice arithmetic and currency formatting

    subtotal = Σ quantity × unit_price
    tax      = floor(subtotal × tax_rate_percent / 100)
    total    = subtotal + tax

All arithmetic runs on Decimal so the floor is taken on the exact product
(binary floats would turn 100 × 29% into 28.999... and lose a unit).
Amounts stay in the invoice currency's major unit; nothing is converted.

Usage:
    from report_studio.domain.finance import calculate_totals, format_money

    totals = calculate_totals(invoice.items, invoice.tax_rate_percent)
    print(format_money(totals.total, invoice.currency))   # "$4,840.00"
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..core.logging_config import get_logger
from .document import Currency, Invoice, LineItem, Number

logger = get_logger(__name__)


@dataclass(frozen=True)
class CurrencyFormat:
    symbol: str
    fraction_digits: int


# JPY has no minor unit; the yen sign is the full-width form used in ja-JP.
CURRENCY_FORMATS: dict[Currency, CurrencyFormat] = {
    Currency.JPY: CurrencyFormat(symbol="￥", fraction_digits=0),
    Currency.USD: CurrencyFormat(symbol="$", fraction_digits=2),
    Currency.PHP: CurrencyFormat(symbol="₱", fraction_digits=2),
}


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal


@dataclass(frozen=True)
class InvoiceLine:
    """A line item together with its amount and formatted prices."""

    item: LineItem
    amount: Decimal
    unit_price_display: str
    amount_display: str


@dataclass(frozen=True)
class InvoiceSummary:
    """
    Everything the invoice page prints that is computed rather than typed in.

    Attributes:
        totals: Subtotal, tax and total as Decimals
        lines: One InvoiceLine per line item, in invoice order
        subtotal_display / tax_display / total_display: Formatted amounts
        tax_rate_label: Tax rate as shown next to the tax row (e.g. "10%")
    """

    totals: InvoiceTotals
    lines: tuple[InvoiceLine, ...]
    subtotal_display: str
    tax_display: str
    total_display: str
    tax_rate_label: str


def to_decimal(value: Number) -> Decimal:
    """Convert an int, float or Decimal to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def line_amount(item: LineItem) -> Decimal:
    return to_decimal(item.quantity) * to_decimal(item.unit_price)


def calculate_totals(items: Sequence[LineItem], tax_rate_percent: Number) -> InvoiceTotals:
    """
    Compute subtotal, tax and total for a set of line items.

    Args:
        items: Invoice line items (may be empty)
        tax_rate_percent: Tax rate in percent, e.g. 10 for 10%

    Returns:
        InvoiceTotals; total always equals subtotal + tax

    Example:
        >>> items = [LineItem("1", "Fee", 1, 4500), LineItem("2", "License", 2, 45), LineItem("3", "Support", 1, 250)]
        >>> calculate_totals(items, 0)
        InvoiceTotals(subtotal=Decimal('4840'), tax=Decimal('0'), total=Decimal('4840'))
    """
    subtotal = sum((line_amount(item) for item in items), Decimal(0))
    tax = Decimal(math.floor(subtotal * to_decimal(tax_rate_percent) / 100))
    return InvoiceTotals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def format_money(amount: Number, currency: Currency | str) -> str:
    """
    Format an amount in the canonical convention of ``currency``.

    Zero-decimal currencies print no fraction digits, the others exactly
    two. Thousands are grouped with commas, the symbol precedes the digits
    and a minus sign precedes the symbol. Rounding is half-up.

    Args:
        amount: Amount in the currency's major unit
        currency: Currency or its ISO code

    Returns:
        Formatted string, e.g. "￥4,840", "$4,840.00", "₱1,234.50"

    Raises:
        ValueError: If ``currency`` is not a supported code
    """
    currency_format = CURRENCY_FORMATS[Currency(currency)]
    digits = currency_format.fraction_digits

    value = to_decimal(amount).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{currency_format.symbol}{abs(value):,.{digits}f}"


def format_rate(rate: Number) -> str:
    """Format a tax rate without trailing zeros: 10 -> "10%", 7.5 -> "7.5%"."""
    value = to_decimal(rate)
    text = f"{value.normalize():f}" if value != value.to_integral_value() else f"{int(value)}"
    return f"{text}%"


def summarize_invoice(invoice: Invoice) -> InvoiceSummary:
    """
    Derive every computed figure the invoice page shows.

    Args:
        invoice: Invoice from the current Document snapshot

    Returns:
        InvoiceSummary with totals, per-line amounts and formatted strings
    """
    currency = invoice.currency
    totals = calculate_totals(invoice.items, invoice.tax_rate_percent)

    lines = tuple(
        InvoiceLine(
            item=item,
            amount=line_amount(item),
            unit_price_display=format_money(item.unit_price, currency),
            amount_display=format_money(line_amount(item), currency),
        )
        for item in invoice.items
    )

    logger.debug(
        "Invoice totals calculated",
        extra={
            "line_count": len(lines),
            "subtotal": str(totals.subtotal),
            "tax": str(totals.tax),
            "currency": str(currency),
        },
    )

    return InvoiceSummary(
        totals=totals,
        lines=lines,
        subtotal_display=format_money(totals.subtotal, currency),
        tax_display=format_money(totals.tax, currency),
        total_display=format_money(totals.total, currency),
        tax_rate_label=format_rate(invoice.tax_rate_percent),
    )
