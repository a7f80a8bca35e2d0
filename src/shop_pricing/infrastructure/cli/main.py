import click

from shop_pricing.domain.exceptions import DomainException
from shop_pricing.infrastructure.bootstrap import settings
from shop_pricing.infrastructure.cli.discount_commands import (
    discount_add,
    discount_disable,
    discount_enable,
    discount_list,
    discount_redeem,
)
from shop_pricing.infrastructure.cli.quote_commands import quote
from shop_pricing.infrastructure.cli.tax_commands import (
    tax_add,
    tax_disable,
    tax_enable,
    tax_list,
)
from shop_pricing.infrastructure.log_config import configure_logging


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override SHOP_PRICING_LOG_LEVEL.",
)
def cli(log_level: str | None) -> None:
    """Storefront pricing: taxes, discounts and order quotes."""
    try:
        level = log_level or settings().log_level
    except DomainException as exc:
        raise click.ClickException(str(exc))
    configure_logging(level.upper())


@cli.group()
def tax() -> None:
    """Manage tax rules."""


@cli.group()
def discount() -> None:
    """Manage discount codes."""


# Register subcommands
tax.add_command(tax_add)
tax.add_command(tax_list)
tax.add_command(tax_enable)
tax.add_command(tax_disable)
discount.add_command(discount_add)
discount.add_command(discount_list)
discount.add_command(discount_redeem)
discount.add_command(discount_enable)
discount.add_command(discount_disable)
cli.add_command(quote)
