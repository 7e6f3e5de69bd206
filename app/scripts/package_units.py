"""
CLI para consultar e manter as unidades de embalagem de um produto.

Uso:
    python -m app.scripts.package_units show PRODUCT_ID
    python -m app.scripts.package_units history PRODUCT_ID --date 2024-01-01T00:00:00
    python -m app.scripts.package_units replace PRODUCT_ID --file units.json
    python -m app.scripts.package_units delete PRODUCT_ID
    python -m app.scripts.package_units validate --file units.json
    python -m app.scripts.package_units display PRODUCT_ID 1635 [--date ...]
    python -m app.scripts.package_units parse PRODUCT_ID "1盒 5排 3粒"

units.json é uma lista de objetos {"unit_name", "unit_value", "is_base_unit"}.
Todas as saídas são JSON; o código de saída é 1 quando a operação falha.
"""
import argparse
import json
import logging
from datetime import datetime
from typing import Any, List
from pydantic import BaseModel, TypeAdapter
from app.config import settings
from app.database import SessionLocal
from app.schemas.package_unit import PackageUnitCreate
from app.services.package_unit_service import PackageUnitService

logger = logging.getLogger(__name__)

_units_adapter = TypeAdapter(List[PackageUnitCreate])


def _print(payload: Any):
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json")
    elif isinstance(payload, list):
        payload = [item.model_dump(mode="json") for item in payload]
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def _load_units(path: str) -> List[PackageUnitCreate]:
    with open(path, encoding="utf-8") as f:
        return _units_adapter.validate_python(json.load(f))


def cmd_show(args, service: PackageUnitService) -> int:
    _print(service.get_current(args.product_id))
    return 0


def cmd_history(args, service: PackageUnitService) -> int:
    _print(service.get_as_of(args.product_id, args.date))
    return 0


def cmd_replace(args, service: PackageUnitService) -> int:
    result = service.replace(args.product_id, _load_units(args.file))
    _print(result)
    return 0 if result.success else 1


def cmd_delete(args, service: PackageUnitService) -> int:
    result = service.delete(args.product_id)
    _print(result)
    return 0 if result.success else 1


def cmd_validate(args, service: PackageUnitService) -> int:
    result = service.validate(_load_units(args.file))
    _print(result)
    return 0 if result.is_valid else 1


def cmd_display(args, service: PackageUnitService) -> int:
    _print(service.display_for_product(args.product_id, args.quantity, as_of=args.date))
    return 0


def cmd_parse(args, service: PackageUnitService) -> int:
    result = service.parse_for_product(args.product_id, args.text)
    _print(result)
    return 0 if not result.errors else 1


def build_parser():
    p = argparse.ArgumentParser(prog="package_units")
    sub = p.add_subparsers(dest="cmd")

    s = sub.add_parser("show", help="Show the active package units of a product")
    s.add_argument("product_id")
    s.set_defaults(func=cmd_show)

    s = sub.add_parser("history", help="Show the package units in force at a date")
    s.add_argument("product_id")
    s.add_argument("--date", type=datetime.fromisoformat, required=True, help="ISO 8601 date/time")
    s.set_defaults(func=cmd_history)

    s = sub.add_parser("replace", help="Replace the package units of a product")
    s.add_argument("product_id")
    s.add_argument("--file", required=True, help="JSON file with the new units")
    s.set_defaults(func=cmd_replace)

    s = sub.add_parser("delete", help="Deactivate the package units of a product")
    s.add_argument("product_id")
    s.set_defaults(func=cmd_delete)

    s = sub.add_parser("validate", help="Validate a package unit configuration file")
    s.add_argument("--file", required=True, help="JSON file with the units")
    s.set_defaults(func=cmd_validate)

    s = sub.add_parser("display", help="Convert a base quantity into packages")
    s.add_argument("product_id")
    s.add_argument("quantity", type=int)
    s.add_argument("--date", type=datetime.fromisoformat, default=None, help="Use the configuration in force at this date")
    s.set_defaults(func=cmd_display)

    s = sub.add_parser("parse", help="Convert package input like '1盒 5排' into base units")
    s.add_argument("product_id")
    s.add_argument("text")
    s.set_defaults(func=cmd_parse)

    return p


def main(argv=None, session_factory=SessionLocal):
    p = build_parser()
    args = p.parse_args(argv)
    if not hasattr(args, "func"):
        p.print_help()
        return 2

    db = session_factory()
    try:
        return args.func(args, PackageUnitService.for_session(db))
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
    raise SystemExit(main())
