import json
import logging
import sys

import click

from . import __version__ as VERSION
from .basket import Basket, Line
from .config import Config, refresh_config
from .currency import Currency
from .errors import ProductNotFoundError, TillError
from .pricelist import PriceList, default_price_list, load_price_list

logger = logging.getLogger(__name__)

DEMO_SCANS = ("A0002", "A0001", "A0002")


def _emit_structured_error(message: str, *, code: str, category: str, as_json: bool = False, exit_code: int = 2):
    payload = {
        "ok": False,
        "error": {
            "code": code,
            "category": category,
            "message": message,
        },
    }
    if as_json:
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
    else:
        click.echo(f"till error [{category}:{code}]: {message}", err=True)
    sys.exit(exit_code)


def _load(ctx, as_json: bool = False) -> PriceList:
    try:
        return load_price_list(ctx.obj["price_list"])
    except TillError as exc:
        _emit_structured_error(exc.explanation, code=exc.error_code, category=exc.category, as_json=as_json)


def _money(config: Config, amount: Currency) -> str:
    return amount.display(pad_minor=config.pad_minor_units)


def _line_row(config: Config, line: Line) -> dict:
    return {
        "product": line.product.name,
        "quantity": line.quantity,
        "unit_price": line.product.price.minor_units,
        "deal": line.deal.name if line.deal else None,
        "amount": line.amount.minor_units,
        "display": _money(config, line.amount),
    }


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--version", is_flag=True, help="Show the version and exit.")
@click.option("--price-list", "price_list", type=click.Path(dir_okay=False), help="Price list file (TOML or JSON).")
def main(ctx, version, price_list):
    """till: point-of-sale basket pricing"""
    config = refresh_config()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"config": config, "price_list": price_list or config.price_list}

    if version:
        click.echo(f"till version {VERSION}")
        return
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable output")
@click.pass_context
def catalog(ctx, json_output):
    """List catalog products and unit prices."""
    config = ctx.obj["config"]
    prices = _load(ctx, json_output)
    if json_output:
        rows = [{"product": p.name, "price": p.price.minor_units} for p in prices.catalog.products.values()]
        click.echo(json.dumps(rows, indent=2, sort_keys=True))
        return
    for product in prices.catalog.products.values():
        click.echo(f"{product.name}  {_money(config, product.price)}")


@main.command()
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable output")
@click.pass_context
def deals(ctx, json_output):
    """List available deals by name."""
    prices = _load(ctx, json_output)
    if json_output:
        rows = [{"name": d.name, "product": d.product, "kind": d.kind.label} for d in prices.deals]
        click.echo(json.dumps(rows, indent=2, sort_keys=True))
        return
    if not prices.deals:
        click.echo("No deals configured.")
    for deal in prices.deals:
        click.echo(f"{deal.name}  product={deal.product} kind={deal.kind.label}")


@main.command()
@click.argument("identifiers", nargs=-1, required=True)
@click.option("--deal", "deal_names", multiple=True, help="Attach a deal by name (repeatable, applied in order)")
@click.option("--all-deals", is_flag=True, help="Attach every deal in the price list, in file order")
@click.option("--strict", is_flag=True, default=False, help="Fail on the first unknown identifier")
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable output")
@click.pass_context
def total(ctx, identifiers, deal_names, all_deals, strict, json_output):
    """Scan IDENTIFIERS into a basket and print its total."""
    config = ctx.obj["config"]
    if all_deals and deal_names:
        raise click.UsageError("Use either --deal or --all-deals, not both.")
    strict = strict or config.strict_scan
    prices = _load(ctx, json_output)
    basket = Basket(prices.catalog)

    skipped = []
    for identifier in identifiers:
        try:
            basket.scan(identifier)
        except ProductNotFoundError as exc:
            if strict:
                _emit_structured_error(exc.explanation, code=exc.error_code, category=exc.category, as_json=json_output)
            logger.warning("Ignoring scan of unknown product %s", identifier)
            skipped.append(identifier)

    try:
        attached = list(prices.deals) if all_deals else [prices.deal(name) for name in deal_names]
    except TillError as exc:
        _emit_structured_error(exc.explanation, code=exc.error_code, category=exc.category, as_json=json_output)
    for deal in attached:
        basket.add_deal(deal)

    lines = basket.lines()
    amount = basket.total()
    if json_output:
        payload = {
            "ok": True,
            "lines": [_line_row(config, line) for line in lines],
            "skipped": skipped,
            "total": amount.minor_units,
            "display": _money(config, amount),
        }
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
        return

    for identifier in skipped:
        click.echo(f"SKIP: {identifier} (not in catalog)")
    for line in lines:
        deal = f" [{line.deal.name}]" if line.deal else ""
        click.echo(f"{line.product.name} x{line.quantity}{deal}  {_money(config, line.amount)}")
    click.echo(f"Total: {_money(config, amount)}")


@main.command()
@click.pass_context
def demo(ctx):
    """Price the reference basket once per built-in deal."""
    config = ctx.obj["config"]
    prices = default_price_list()
    for title, deal in (("Buy1Get1Free", prices.deals[0]), ("10Percent", prices.deals[1])):
        basket = Basket(prices.catalog)
        for identifier in DEMO_SCANS:
            basket.scan(identifier)
        basket.add_deal(deal)
        click.echo(f"{title} Total: {_money(config, basket.total())}")


if __name__ == "__main__":
    main()
