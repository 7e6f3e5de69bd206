from app.database import Base
from app.models.package_unit import ProductPackageUnit, ProductPackageUnitGeneration

__all__ = [
    "Base",
    "ProductPackageUnit",
    "ProductPackageUnitGeneration",
]
