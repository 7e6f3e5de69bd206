from app.schemas.package_unit import (
    PackageUnitBase,
    PackageUnitCreate,
    PackageUnit,
    PackageUnitValidationResult,
    PackageBreakdownItem,
    PackageDisplayResult,
    ParsedPackageInput,
    PackageInputParseResult,
    PackageUnitOperationResult,
)

__all__ = [
    "PackageUnitBase",
    "PackageUnitCreate",
    "PackageUnit",
    "PackageUnitValidationResult",
    "PackageBreakdownItem",
    "PackageDisplayResult",
    "ParsedPackageInput",
    "PackageInputParseResult",
    "PackageUnitOperationResult",
]
