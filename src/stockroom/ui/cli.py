from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from stockroom.app import CatalogService
from stockroom.config import configure_logging
from stockroom.domain.errors import CatalogError
from stockroom.domain.model import ProductSortField
from stockroom.domain.pagination import DEFAULT_PAGE_SIZE, PageRequest
from stockroom.ui.schema import ProductInput, ProductPatchInput, ProductView

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from types import FrameType

    from stockroom.domain.model import Product

    type Command = Callable[[CatalogService], None]

log = logging.getLogger(__name__)

_PATCH_FIELDS = ("name", "description", "price", "stock", "active")


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the Stockroom product catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Create a product")
    _add_field_arguments(create)

    get = subparsers.add_parser("get", help="Show one product (including soft-deleted)")
    get.add_argument("product_id", help="Product id")

    listing = subparsers.add_parser("list", help="List live products one page at a time")
    listing.add_argument("--page", type=int, default=0, help="Zero-based page number")
    listing.add_argument(
        "--size",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help=f"Page size (defaults to {DEFAULT_PAGE_SIZE})",
    )
    listing.add_argument(
        "--sort",
        choices=[field.value for field in ProductSortField],
        default=ProductSortField.NAME.value,
        help="Field to sort by",
    )
    listing.add_argument("--desc", action="store_true", help="Sort in descending order")

    search = subparsers.add_parser("search", help="Find live products by name fragment")
    search.add_argument("fragment", help="Case-insensitive part of the product name")

    price_range = subparsers.add_parser(
        "price-range",
        help="Find live products priced within an inclusive range",
    )
    price_range.add_argument("min_price", help="Lower bound, e.g. 1.50")
    price_range.add_argument("max_price", help="Upper bound, e.g. 9.99")

    update = subparsers.add_parser("update", help="Replace every field of a product")
    update.add_argument("product_id", help="Product id")
    _add_field_arguments(update)

    patch = subparsers.add_parser("patch", help="Change only the given fields of a product")
    patch.add_argument("product_id", help="Product id")
    patch.add_argument("--name", default=argparse.SUPPRESS, help="New name")
    description = patch.add_mutually_exclusive_group()
    description.add_argument("--description", default=argparse.SUPPRESS, help="New description")
    description.add_argument(
        "--clear-description",
        dest="description",
        action="store_const",
        const=None,
        default=argparse.SUPPRESS,
        help="Remove the description",
    )
    patch.add_argument("--price", default=argparse.SUPPRESS, help="New price, e.g. 4.99")
    patch.add_argument("--stock", type=int, default=argparse.SUPPRESS, help="New stock level")
    active = patch.add_mutually_exclusive_group()
    active.add_argument(
        "--active",
        dest="active",
        action="store_const",
        const=True,
        default=argparse.SUPPRESS,
        help="Mark the product active",
    )
    active.add_argument(
        "--inactive",
        dest="active",
        action="store_const",
        const=False,
        default=argparse.SUPPRESS,
        help="Mark the product inactive",
    )

    adjust = subparsers.add_parser("adjust-stock", help="Add a signed delta to the stock level")
    adjust.add_argument("product_id", help="Product id")
    adjust.add_argument("delta", type=int, help="Signed stock change, e.g. -3")

    soft_delete = subparsers.add_parser("soft-delete", help="Hide a product from live queries")
    soft_delete.add_argument("product_id", help="Product id")

    delete = subparsers.add_parser("delete", help="Permanently remove products")
    delete.add_argument("product_ids", nargs="+", help="One or more product ids")

    return parser.parse_args(list(argv))


def _add_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", required=True, help="Product name")
    parser.add_argument("--description", help="Optional description")
    parser.add_argument("--price", required=True, help="Price with at most two decimals")
    parser.add_argument("--stock", type=int, required=True, help="Units in stock")
    parser.add_argument(
        "--inactive",
        dest="active",
        action="store_false",
        help="Store the product as inactive",
    )


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _parse_decimal(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid decimal amount: {value}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid decimal amount: {value}")
    return amount


def _product_input(args: argparse.Namespace) -> ProductInput:
    return ProductInput(
        name=args.name,
        description=args.description,
        price=args.price,
        stock=args.stock,
        active=args.active,
    )


def _patch_input(args: argparse.Namespace) -> ProductPatchInput:
    given = {name: getattr(args, name) for name in _PATCH_FIELDS if hasattr(args, name)}
    return ProductPatchInput.model_validate(given)


def _emit(products: Iterable[Product]) -> None:
    _write_views(ProductView.model_validate(product) for product in products)


def _write_views(views: Iterable[ProductView]) -> None:
    for view in views:
        sys.stdout.write(view.model_dump_json() + "\n")


def _build_command(args: argparse.Namespace) -> Command:  # noqa: C901, PLR0911
    """Validate the parsed arguments and return the action to run.

    Raises ``ValueError`` (including pydantic's ``ValidationError``) on bad input.
    """

    if args.command == "create":
        fields = _product_input(args).to_fields()
        return lambda service: _emit([service.create(fields)])

    if args.command == "get":
        product_id = _parse_uuid(args.product_id)
        return lambda service: _emit([service.get(product_id)])

    if args.command == "list":
        request = PageRequest(
            page=args.page,
            size=args.size,
            sort=ProductSortField(args.sort),
            descending=args.desc,
        )

        def list_page(service: CatalogService) -> None:
            page = service.list_page(request).map(ProductView.model_validate)
            _write_views(page.items)
            log.info(
                "Page %s of %s (%s products in total)",
                page.number + 1,
                page.total_pages,
                page.total,
            )

        return list_page

    if args.command == "search":
        fragment: str = args.fragment
        return lambda service: _emit(service.search(fragment))

    if args.command == "price-range":
        min_price = _parse_decimal(args.min_price)
        max_price = _parse_decimal(args.max_price)
        return lambda service: _emit(service.by_price(min_price, max_price))

    if args.command == "update":
        product_id = _parse_uuid(args.product_id)
        fields = _product_input(args).to_fields()
        return lambda service: _emit([service.update(product_id, fields)])

    if args.command == "patch":
        product_id = _parse_uuid(args.product_id)
        changes = _patch_input(args).to_changes()
        return lambda service: _emit([service.patch(product_id, changes)])

    if args.command == "adjust-stock":
        product_id = _parse_uuid(args.product_id)
        delta: int = args.delta
        return lambda service: _emit([service.adjust_stock(product_id, delta)])

    if args.command == "soft-delete":
        product_id = _parse_uuid(args.product_id)
        return lambda service: _emit([service.soft_delete(product_id)])

    if args.command == "delete":
        product_ids = [_parse_uuid(value) for value in args.product_ids]
        if len(product_ids) == 1:
            return lambda service: service.delete(product_ids[0])

        def delete_many(service: CatalogService) -> None:
            removed = service.delete_many(product_ids)
            log.info("Deleted %s products", removed)

        return delete_many

    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None, *, service: CatalogService | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        command = _build_command(_parse_args(args_list))
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        command(service or CatalogService())
    except CatalogError as exc:
        log.error("%s: %s", type(exc).__name__, exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error while running %s", args_list[0])
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
