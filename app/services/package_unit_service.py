"""
Serviço de unidades de embalagem (包裝單位) por produto.

Compõe o validador, o conversor e o PackageUnitStore:
- leituras falham abertas (loga e retorna [])
- gravações falham fechadas (success=False, sem supor estado parcial)

replace() desativa a geração atual e grava uma nova em duas etapas; entre
elas o produto fica sem geração ativa. Serialização por produto é
responsabilidade de quem chama; conflitos detectados pelo banco chegam
aqui como PackageUnitStoreError e viram "storage operation failed".
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Sequence
from sqlalchemy.orm import Session
from app.schemas.package_unit import (
    PackageUnit,
    PackageUnitBase,
    PackageUnitValidationResult,
    PackageDisplayResult,
    PackageInputParseResult,
    PackageUnitOperationResult,
)
from app.services.package_unit_validator import validate_package_units
from app.services.package_unit_converter import to_display, to_base_quantity
from app.services.package_unit_store import (
    PackageUnitStore,
    PackageUnitStoreError,
    SqlAlchemyPackageUnitStore,
)

logger = logging.getLogger(__name__)

STORAGE_FAILED_ERROR = "storage operation failed"
EMPTY_PRODUCT_ID_ERROR = "product id must not be empty"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_blank(product_id: Optional[str]) -> bool:
    return not product_id or not str(product_id).strip()


class PackageUnitService:
    def __init__(self, store: PackageUnitStore, clock: Callable[[], datetime] = _utcnow):
        self.store = store
        self.clock = clock

    @classmethod
    def for_session(cls, db: Session) -> "PackageUnitService":
        """Serviço usando a tabela product_package_units da sessão informada"""
        return cls(SqlAlchemyPackageUnitStore(db))

    # Operações puras (sem banco)

    @staticmethod
    def validate(units: Sequence[PackageUnitBase]) -> PackageUnitValidationResult:
        return validate_package_units(units)

    @staticmethod
    def to_display(base_quantity: Any, units: Sequence[PackageUnitBase]) -> PackageDisplayResult:
        return to_display(base_quantity, units)

    @staticmethod
    def to_base_quantity(text: Any, units: Sequence[PackageUnitBase]) -> PackageInputParseResult:
        return to_base_quantity(text, units)

    # Leituras

    def get_current(self, product_id: str) -> List[PackageUnit]:
        """
        Retorna a configuração ativa do produto.

        Em falha do banco loga o erro e retorna lista vazia.
        """
        if _is_blank(product_id):
            return []
        try:
            return self.store.find_active(product_id)
        except PackageUnitStoreError as e:
            logger.error(f"Error fetching package units for product {product_id}: {e}", exc_info=True)
            return []

    def get_as_of(self, product_id: str, date: datetime) -> List[PackageUnit]:
        """
        Retorna a configuração que estava vigente em date (relatórios históricos).

        Antes da primeira geração, ou em falha do banco, retorna lista vazia.
        """
        if _is_blank(product_id):
            return []
        try:
            return self.store.find_as_of(product_id, date)
        except PackageUnitStoreError as e:
            logger.error(
                f"Error fetching package units for product {product_id} as of {date}: {e}",
                exc_info=True,
            )
            return []

    # Gravações

    def replace(self, product_id: str, units: Sequence[PackageUnitBase]) -> PackageUnitOperationResult:
        """
        Substitui a configuração do produto por uma nova geração.

        1. Valida (se inválida, retorna sem tocar no banco)
        2. Encerra a geração ativa
        3. Grava a nova geração com effective_from = agora
        4. Relê a geração ativa e a retorna como resultado

        Returns:
            PackageUnitOperationResult com data = geração gravada, ou
            success=False com error e, se for o caso, validation
        """
        if _is_blank(product_id):
            return PackageUnitOperationResult(success=False, error=EMPTY_PRODUCT_ID_ERROR)

        validation = validate_package_units(units)
        if not validation.is_valid:
            logger.warning(f"Package units rejected for product {product_id}: {validation.errors}")
            return PackageUnitOperationResult(
                success=False,
                error=f"configuration validation failed: {', '.join(validation.errors)}",
                validation=validation,
            )

        now = self.clock()
        try:
            self.store.deactivate_active(product_id, now)
            self.store.insert_generation(product_id, units, now)
            saved = self.store.find_active(product_id)
        except PackageUnitStoreError as e:
            logger.error(f"Error replacing package units for product {product_id}: {e}", exc_info=True)
            return PackageUnitOperationResult(success=False, error=STORAGE_FAILED_ERROR)

        logger.info(f"Package units replaced: product_id={product_id}, units_count={len(saved)}")
        return PackageUnitOperationResult(success=True, data=saved, validation=validation)

    def delete(self, product_id: str) -> PackageUnitOperationResult:
        """
        Remove a configuração do produto (soft delete).

        Apenas encerra a geração ativa; o histórico continua disponível em
        get_as_of e um replace posterior cria uma geração nova.
        """
        if _is_blank(product_id):
            return PackageUnitOperationResult(success=False, error=EMPTY_PRODUCT_ID_ERROR)

        try:
            count = self.store.deactivate_active(product_id, self.clock())
        except PackageUnitStoreError as e:
            logger.error(f"Error deleting package units for product {product_id}: {e}", exc_info=True)
            return PackageUnitOperationResult(success=False, error=STORAGE_FAILED_ERROR)

        logger.info(f"Package units deleted: product_id={product_id}, units_count={count}")
        return PackageUnitOperationResult(success=True)

    # Conversões com a configuração do produto

    def display_for_product(
        self,
        product_id: str,
        base_quantity: Any,
        as_of: Optional[datetime] = None,
    ) -> PackageDisplayResult:
        """Converte base_quantity usando a configuração atual, ou a vigente em as_of"""
        if as_of is not None:
            units = self.get_as_of(product_id, as_of)
        else:
            units = self.get_current(product_id)
        return to_display(base_quantity, units)

    def parse_for_product(self, product_id: str, text: Any) -> PackageInputParseResult:
        """Converte a entrada de texto usando a configuração atual do produto"""
        return to_base_quantity(text, self.get_current(product_id))
