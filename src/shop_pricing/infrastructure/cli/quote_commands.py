"""CLI command that prices an order the way checkout does."""

from __future__ import annotations

import json

import click

from shop_pricing.application.dto import CartItemSpec, QuoteDTO
from shop_pricing.domain.exceptions import DomainException
from shop_pricing.infrastructure.bootstrap import quote_order_handler


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'SKU-1:15.00:3,SKU-2:25:1' into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        parts = entry.rsplit(":", 2)
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductId:Price:Quantity'."
            )
        product_id, price, qty_str = parts
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(
            CartItemSpec(product_id=product_id.strip(), unit_price=price.strip(), quantity=qty)
        )
    return specs


def _display_quote(dto: QuoteDTO) -> None:
    if dto.discount_error:
        click.echo(f"Discount not applied: {dto.discount_error}")
        click.echo()

    click.echo(f"  {'Subtotal':<30} {dto.subtotal:>12}")
    if dto.discount_code:
        click.echo(f"  {'Discount (' + dto.discount_code + ')':<30} {'-' + dto.discount_amount:>12}")
    click.echo(f"  {'Delivery':<30} {dto.adjusted_delivery_fee:>12}")
    for t in dto.tax_breakdown:
        label = f"{t.name} ({t.rate}{'%' if t.type == 'percentage' else ''})"
        click.echo(f"  {label:<30} {t.amount:>12}")
    click.echo(f"  {'-'*43}")
    click.echo(f"  {'Total (' + dto.currency + ')':<30} {dto.grand_total:>12}")


@click.command("quote")
@click.option("--items", required=True, help="Items as 'ProductId:Price:Qty,...'.")
@click.option("--delivery", "delivery_fee", default=None, help="Selected delivery fee.")
@click.option("--code", "discount_code", default=None, help="Discount code to apply.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print order fields as JSON.")
def quote(items: str, delivery_fee: str | None, discount_code: str | None, as_json: bool) -> None:
    """Price an order: subtotal, discount, delivery, taxes and total."""
    specs = _parse_items(items)
    handler = quote_order_handler()

    try:
        dto = handler.handle(specs, delivery_fee=delivery_fee, discount_code=discount_code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if as_json:
        payload = dto.order_fields()
        if dto.discount_error:
            payload["discount_error"] = dto.discount_error
        click.echo(json.dumps(payload, indent=2))
    else:
        _display_quote(dto)
