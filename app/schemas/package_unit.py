"""
Schemas Pydantic para unidades de embalagem (包裝單位) de produtos.

PackageUnitCreate é a configuração candidata enviada por quem chama;
PackageUnit é o snapshot imutável de uma linha persistida. Os demais
modelos são os resultados devolvidos pelo validador, pelo conversor e
pelo serviço - erros viajam como dados, nunca como exceções.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Union
from uuid import UUID
from datetime import datetime


class PackageUnitBase(BaseModel):
    unit_name: str
    # int | float de propósito: o validador é quem rejeita 2.5 ou -1
    unit_value: Union[int, float]
    is_base_unit: bool = False
    is_active: bool = True


class PackageUnitCreate(PackageUnitBase):
    pass


class PackageUnit(PackageUnitBase):
    id: Optional[UUID] = None
    product_id: str
    unit_value: int = Field(..., ge=1)
    effective_from: datetime
    effective_to: Optional[datetime] = None
    version: int = Field(default=1, ge=1)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class PackageUnitValidationResult(BaseModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class PackageBreakdownItem(BaseModel):
    unit_name: str
    quantity: int
    unit_value: int


class PackageDisplayResult(BaseModel):
    base_quantity: int
    package_breakdown: List[PackageBreakdownItem] = Field(default_factory=list)
    display_text: str
    config_used: List[PackageUnitBase] = Field(default_factory=list)


class ParsedPackageInput(BaseModel):
    unit_name: str
    quantity: int


class PackageInputParseResult(BaseModel):
    base_quantity: int = 0
    parsed_input: List[ParsedPackageInput] = Field(default_factory=list)
    display_text: str = ""
    errors: List[str] = Field(default_factory=list)


class PackageUnitOperationResult(BaseModel):
    success: bool
    data: List[PackageUnit] = Field(default_factory=list)
    error: Optional[str] = None
    validation: Optional[PackageUnitValidationResult] = None
