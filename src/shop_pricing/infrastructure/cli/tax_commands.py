"""CLI commands for the TaxRule aggregate."""

from __future__ import annotations

import click

from shop_pricing.application.add_tax_rule import AddTaxRuleHandler
from shop_pricing.application.list_rules import ListTaxRulesHandler
from shop_pricing.application.set_tax_rule_active import SetTaxRuleActiveHandler
from shop_pricing.domain.exceptions import DomainException
from shop_pricing.infrastructure.bootstrap import tax_rule_repository


@click.command("add")
@click.option("--name", required=True, help="Label shown on the order summary.")
@click.option(
    "--type",
    "tax_type",
    type=click.Choice(["percentage", "fixed"]),
    default="percentage",
    show_default=True,
)
@click.option(
    "--applies-to",
    type=click.Choice(["products", "shipping", "total"]),
    default="products",
    show_default=True,
)
@click.option("--rate", required=True, help="Percent (15 or 0.15) or flat amount.")
@click.option("--inactive", is_flag=True, default=False, help="Create the rule disabled.")
def tax_add(name: str, tax_type: str, applies_to: str, rate: str, inactive: bool) -> None:
    """Add a tax rule."""
    handler = AddTaxRuleHandler(tax_repo=tax_rule_repository())

    try:
        rule = handler.handle(
            name=name,
            type=tax_type,
            applies_to=applies_to,
            rate=rate,
            is_active=not inactive,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Tax rule #{rule.id} '{rule.name}' added ({rule.type.value}, {rule.rate})")


@click.command("list")
def tax_list() -> None:
    """List all tax rules."""
    handler = ListTaxRulesHandler(tax_repo=tax_rule_repository())

    try:
        rules = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rules:
        click.echo("No tax rules found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Type':<12} {'Applies to':<10} {'Rate':>8} {'Active':>7}")
    click.echo("-" * 68)
    for r in rules:
        active = "yes" if r.is_active else "no"
        click.echo(
            f"{r.id:<6} {r.name:<20} {r.type:<12} {r.applies_to:<10} {r.rate:>8} {active:>7}"
        )


def _set_active(rule_id: str, active: bool) -> None:
    handler = SetTaxRuleActiveHandler(tax_repo=tax_rule_repository())

    try:
        handler.handle(rule_id, active)
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("enable")
@click.option("--id", "rule_id", required=True, help="Tax rule ID.")
def tax_enable(rule_id: str) -> None:
    """Enable a tax rule."""
    _set_active(rule_id, True)
    click.echo(f"Tax rule #{rule_id} enabled.")


@click.command("disable")
@click.option("--id", "rule_id", required=True, help="Tax rule ID.")
def tax_disable(rule_id: str) -> None:
    """Disable a tax rule (kept for history, no longer charged)."""
    _set_active(rule_id, False)
    click.echo(f"Tax rule #{rule_id} disabled.")
