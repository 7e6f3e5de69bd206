"""
Seed com configurações de unidades de embalagem para produtos de demonstração
"""
import logging
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from app.config import settings
from app.database import SessionLocal
from app.schemas.package_unit import PackageUnitCreate
from app.services.package_unit_service import PackageUnitService

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_UNITS: Dict[str, List[PackageUnitCreate]] = {
    # 1 盒 = 100 排, 1 排 = 10 粒
    "demo-amoxicillin-500mg": [
        PackageUnitCreate(unit_name="盒", unit_value=1000),
        PackageUnitCreate(unit_name="排", unit_value=10),
        PackageUnitCreate(unit_name="粒", unit_value=1, is_base_unit=True),
    ],
    "demo-paracetamol-syrup": [
        PackageUnitCreate(unit_name="箱", unit_value=24),
        PackageUnitCreate(unit_name="瓶", unit_value=1, is_base_unit=True),
    ],
    "demo-gauze-pads": [
        PackageUnitCreate(unit_name="box", unit_value=100),
        PackageUnitCreate(unit_name="pack", unit_value=10),
        PackageUnitCreate(unit_name="pad", unit_value=1, is_base_unit=True),
    ],
}


def seed_package_units(db: Optional[Session] = None) -> int:
    """
    Grava as configurações padrão para produtos que ainda não têm geração ativa.

    Returns:
        Quantidade de produtos configurados
    """
    owns_session = db is None
    if owns_session:
        db = SessionLocal()
    service = PackageUnitService.for_session(db)
    created = 0
    try:
        for product_id, units in DEFAULT_PACKAGE_UNITS.items():
            if service.get_current(product_id):
                print(f"⏭️  Produto '{product_id}' já tem unidades de embalagem")
                continue

            result = service.replace(product_id, units)
            if not result.success:
                raise RuntimeError(f"Falha ao configurar '{product_id}': {result.error}")

            created += 1
            print(f"✅ Produto '{product_id}': {', '.join(u.unit_name for u in result.data)}")

        print("✅ Seed de unidades de embalagem concluído com sucesso!")
        return created
    except Exception as e:
        print(f"❌ Erro ao executar seed: {str(e)}")
        raise
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
    seed_package_units()
