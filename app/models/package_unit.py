from sqlalchemy import (
    Column,
    String,
    Integer,
    Boolean,
    DateTime,
    Uuid,
    Index,
    CheckConstraint,
    text,
)
from sqlalchemy.sql import func
import uuid
from app.database import Base


class ProductPackageUnit(Base):
    """
    Uma unidade de embalagem de um produto (ex: "盒" = 1000 unidades base).

    Linhas com o mesmo product_id e effective_from formam uma geração.
    Gerações antigas ficam com is_active=False e effective_to preenchido,
    nunca são apagadas.
    """
    __tablename__ = "product_package_units"
    __table_args__ = (
        CheckConstraint("unit_value >= 1", name="ck_package_units_unit_value_positive"),
        CheckConstraint("version >= 1", name="ck_package_units_version_positive"),
        CheckConstraint(
            "effective_to IS NULL OR effective_to > effective_from",
            name="ck_package_units_effective_window",
        ),
        # Nomes, valores e unidade base únicos dentro da geração ativa
        Index(
            "uq_package_units_active_name",
            "product_id",
            "unit_name",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
        Index(
            "uq_package_units_active_value",
            "product_id",
            "unit_value",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
        Index(
            "uq_package_units_active_base_unit",
            "product_id",
            unique=True,
            postgresql_where=text("is_active AND is_base_unit"),
            sqlite_where=text("is_active AND is_base_unit"),
        ),
        Index("ix_package_units_product_window", "product_id", "effective_from", "effective_to"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    product_id = Column(String(64), nullable=False, index=True)
    unit_name = Column(String(50), nullable=False)
    unit_value = Column(Integer, nullable=False)  # quantidade em unidades base
    is_base_unit = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    effective_from = Column(DateTime(timezone=True), nullable=False)
    effective_to = Column(DateTime(timezone=True), nullable=True)  # NULL enquanto vigente
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return (
            f"<ProductPackageUnit(product_id='{self.product_id}', unit_name='{self.unit_name}', "
            f"unit_value={self.unit_value}, is_active={self.is_active})>"
        )


class ProductPackageUnitGeneration(Base):
    """
    Geração ativa de um produto: uma linha por produto enquanto houver
    configuração vigente.

    A chave primária em product_id garante no máximo uma geração ativa por
    produto. A linha é gravada na mesma transação das unidades da geração e
    removida quando ela é encerrada.
    """
    __tablename__ = "product_package_unit_generations"

    product_id = Column(String(64), primary_key=True)
    effective_from = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return (
            f"<ProductPackageUnitGeneration(product_id='{self.product_id}', "
            f"effective_from={self.effective_from})>"
        )
