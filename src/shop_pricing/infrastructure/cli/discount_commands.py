"""CLI commands for the DiscountRule aggregate."""

from __future__ import annotations

import click

from shop_pricing.application.add_discount_rule import AddDiscountRuleHandler
from shop_pricing.application.list_rules import ListDiscountRulesHandler
from shop_pricing.application.redeem_discount import RedeemDiscountHandler
from shop_pricing.application.set_discount_rule_active import SetDiscountRuleActiveHandler
from shop_pricing.domain.exceptions import DomainException
from shop_pricing.infrastructure.bootstrap import discount_rule_repository


@click.command("add")
@click.option("--code", default=None, help="Code to redeem; generated when omitted.")
@click.option(
    "--type",
    "discount_type",
    type=click.Choice(["percentage", "fixed_amount", "free_shipping"]),
    required=True,
)
@click.option("--value", default="0", show_default=True, help="Percent or amount off.")
@click.option(
    "--applies-to",
    type=click.Choice(["products", "shipping", "total"]),
    default="products",
    show_default=True,
    help="Ignored for percentage (always products) and free_shipping.",
)
@click.option("--minimum", "minimum_amount", default="0", show_default=True)
@click.option("--max-discount", "maximum_discount", default=None, help="Cap for percentage discounts.")
@click.option("--valid-from", default=None, help="ISO-8601 start (default: now).")
@click.option("--valid-until", default=None, help="ISO-8601 end (default: open-ended).")
@click.option("--usage-limit", type=int, default=None, help="Maximum redemptions.")
@click.option("--inactive", is_flag=True, default=False, help="Create the code disabled.")
def discount_add(
    code: str | None,
    discount_type: str,
    value: str,
    applies_to: str,
    minimum_amount: str,
    maximum_discount: str | None,
    valid_from: str | None,
    valid_until: str | None,
    usage_limit: int | None,
    inactive: bool,
) -> None:
    """Add a discount code."""
    handler = AddDiscountRuleHandler(discount_repo=discount_rule_repository())

    try:
        rule = handler.handle(
            code=code,
            type=discount_type,
            value=value,
            applies_to=applies_to,
            minimum_amount=minimum_amount,
            maximum_discount=maximum_discount,
            valid_from=valid_from,
            valid_until=valid_until,
            usage_limit=usage_limit,
            is_active=not inactive,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Discount code {rule.code} added ({rule.type.value})")


@click.command("list")
def discount_list() -> None:
    """List all discount codes."""
    handler = ListDiscountRulesHandler(discount_repo=discount_rule_repository())

    try:
        rules = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rules:
        click.echo("No discount codes found.")
        return

    click.echo(f"{'Code':<12} {'Type':<14} {'Value':>8} {'Minimum':>10} {'Used':>10} {'Active':>7}")
    click.echo("-" * 66)
    for r in rules:
        used = f"{r.used_count}/{r.usage_limit}" if r.usage_limit else str(r.used_count)
        active = "yes" if r.is_active else "no"
        click.echo(
            f"{r.code:<12} {r.type:<14} {r.value:>8} {r.minimum_amount:>10} {used:>10} {active:>7}"
        )


@click.command("redeem")
@click.option("--code", required=True, help="Code used by a committed order.")
def discount_redeem(code: str) -> None:
    """Count one completed order against a code's usage limit."""
    handler = RedeemDiscountHandler(discount_repo=discount_rule_repository())

    try:
        rule = handler.handle(code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    limit = rule.usage_limit if rule.usage_limit is not None else "unlimited"
    click.echo(f"Discount code {rule.code} redeemed ({rule.used_count}/{limit}).")


def _set_active(code: str, active: bool) -> str:
    handler = SetDiscountRuleActiveHandler(discount_repo=discount_rule_repository())

    try:
        rule = handler.handle(code, active)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    return rule.code


@click.command("enable")
@click.option("--code", required=True, help="Discount code.")
def discount_enable(code: str) -> None:
    """Enable a discount code."""
    click.echo(f"Discount code {_set_active(code, True)} enabled.")


@click.command("disable")
@click.option("--code", required=True, help="Discount code.")
def discount_disable(code: str) -> None:
    """Disable a discount code (kept for history, rejected at checkout)."""
    click.echo(f"Discount code {_set_active(code, False)} disabled.")
