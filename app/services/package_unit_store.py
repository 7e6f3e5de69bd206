"""
Armazenamento das gerações de unidades de embalagem.

O serviço depende apenas do protocolo PackageUnitStore e recebe snapshots
PackageUnit (nunca objetos do ORM). SqlAlchemyPackageUnitStore é a
implementação sobre a tabela product_package_units. Cada geração ativa
também ocupa a linha do produto em product_package_unit_generations
(chave primária product_id), gravada na mesma transação das unidades;
por isso duas substituições concorrentes resultam em
PackageUnitConflictError, mesmo com conjuntos de unidades disjuntos.
"""
import logging
from datetime import datetime
from typing import List, Protocol, Sequence
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.package_unit import ProductPackageUnit, ProductPackageUnitGeneration
from app.schemas.package_unit import PackageUnit, PackageUnitBase

logger = logging.getLogger(__name__)


class PackageUnitStoreError(Exception):
    """Falha de infraestrutura ao ler ou gravar unidades de embalagem"""
    pass


class PackageUnitConflictError(PackageUnitStoreError):
    """Gravação violou a unicidade da geração ativa (ex: substituição concorrente)"""
    pass


class PackageUnitStore(Protocol):
    def find_active(self, product_id: str) -> List[PackageUnit]:
        """Geração ativa do produto, unit_value decrescente ([] se não houver)"""
        ...

    def find_as_of(self, product_id: str, date: datetime) -> List[PackageUnit]:
        """Geração vigente em date, unit_value decrescente ([] se não houver)"""
        ...

    def deactivate_active(self, product_id: str, at: datetime) -> int:
        """Encerra a geração ativa em at; retorna quantas linhas foram encerradas"""
        ...

    def insert_generation(
        self,
        product_id: str,
        definitions: Sequence[PackageUnitBase],
        effective_from: datetime,
    ) -> None:
        """Grava uma nova geração ativa (version=1, effective_to=None)"""
        ...


class SqlAlchemyPackageUnitStore:
    def __init__(self, db: Session):
        self.db = db

    def _to_snapshots(self, rows: List[ProductPackageUnit]) -> List[PackageUnit]:
        return [PackageUnit.model_validate(row) for row in rows]

    def _fail(self, action: str, error: SQLAlchemyError):
        self.db.rollback()
        if isinstance(error, IntegrityError):
            raise PackageUnitConflictError(f"{action}: integrity constraint violated ({error.orig})") from error
        raise PackageUnitStoreError(f"{action}: {error}") from error

    def find_active(self, product_id: str) -> List[PackageUnit]:
        try:
            rows = (
                self.db.query(ProductPackageUnit)
                .filter(
                    ProductPackageUnit.product_id == product_id,
                    ProductPackageUnit.is_active.is_(True),
                )
                .order_by(ProductPackageUnit.unit_value.desc())
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("find_active", e)

        logger.debug(f"Active package units for product {product_id}: {len(rows)}")
        return self._to_snapshots(rows)

    def find_as_of(self, product_id: str, date: datetime) -> List[PackageUnit]:
        try:
            rows = (
                self.db.query(ProductPackageUnit)
                .filter(
                    ProductPackageUnit.product_id == product_id,
                    ProductPackageUnit.effective_from <= date,
                    or_(
                        ProductPackageUnit.effective_to.is_(None),
                        ProductPackageUnit.effective_to >= date,
                    ),
                )
                .order_by(
                    ProductPackageUnit.effective_from.desc(),
                    ProductPackageUnit.unit_value.desc(),
                )
                .all()
            )
        except SQLAlchemyError as e:
            self._fail("find_as_of", e)

        if not rows:
            return []

        # Na fronteira (effective_to antigo == effective_from novo) vence a geração mais nova
        latest = rows[0].effective_from
        rows = [row for row in rows if row.effective_from == latest]

        logger.debug(f"Package units for product {product_id} as of {date.isoformat()}: {len(rows)}")
        return self._to_snapshots(rows)

    def deactivate_active(self, product_id: str, at: datetime) -> int:
        try:
            count = (
                self.db.query(ProductPackageUnit)
                .filter(
                    ProductPackageUnit.product_id == product_id,
                    ProductPackageUnit.is_active.is_(True),
                )
                .update(
                    {
                        ProductPackageUnit.is_active: False,
                        ProductPackageUnit.effective_to: at,
                    },
                    synchronize_session=False,
                )
            )
            (
                self.db.query(ProductPackageUnitGeneration)
                .filter(ProductPackageUnitGeneration.product_id == product_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("deactivate_active", e)

        logger.debug(f"Deactivated {count} package units for product {product_id}")
        return count

    def insert_generation(
        self,
        product_id: str,
        definitions: Sequence[PackageUnitBase],
        effective_from: datetime,
    ) -> None:
        if not definitions:
            return

        rows = [
            ProductPackageUnit(
                product_id=product_id,
                unit_name=definition.unit_name,
                unit_value=int(definition.unit_value),
                is_base_unit=definition.is_base_unit,
                is_active=True,
                effective_from=effective_from,
                effective_to=None,
                version=1,
            )
            for definition in definitions
        ]

        try:
            # Falha com IntegrityError se o produto já tem geração ativa
            self.db.add(ProductPackageUnitGeneration(product_id=product_id, effective_from=effective_from))
            self.db.add_all(rows)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("insert_generation", e)

        logger.debug(f"Inserted {len(rows)} package units for product {product_id}")
