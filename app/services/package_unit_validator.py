"""
Validação de configurações de unidades de embalagem.

Função pura: não acessa banco nem loga acima de debug. Os problemas
encontrados são devolvidos em PackageUnitValidationResult:
- errors bloqueiam a gravação (is_valid=False)
- warnings são apenas avisos (ex: 盒 não divisível por 排)
"""
import logging
from typing import Optional, Sequence, List, Any
from app.config import settings
from app.schemas.package_unit import PackageUnitBase, PackageUnitValidationResult
from app.utils.numbers import as_whole_number

logger = logging.getLogger(__name__)

EMPTY_CONFIGURATION_ERROR = "configuration must not be empty"
MULTIPLE_BASE_UNITS_ERROR = "only one base unit is allowed"
BASE_UNIT_VALUE_WARNING = "base unit value should be 1"


def _duplicates(values: List[Any]) -> List[Any]:
    """Valores repetidos, cada um uma única vez, na ordem da primeira repetição"""
    seen = set()
    repeated = []
    for value in values:
        if value in seen and value not in repeated:
            repeated.append(value)
        seen.add(value)
    return repeated


def validate_package_units(
    units: Sequence[PackageUnitBase],
    name_max_length: Optional[int] = None,
) -> PackageUnitValidationResult:
    """
    Valida uma configuração candidata de unidades de embalagem.

    Regras (na ordem em que são checadas):
    1. Configuração vazia é inválida
    2. unit_name repetido (todos os repetidos numa única mensagem)
    3. unit_value repetido (idem)
    4. No máximo uma unidade base; se houver uma com valor != 1, warning
    5. Por unidade: nome com 1..name_max_length caracteres e valor inteiro positivo
    6. Só se não houver erros: cada par adjacente (maior, menor) ordenado por
       unit_value deve ser divisível, senão warning

    Args:
        units: Configuração candidata
        name_max_length: Limite do nome (padrão: settings.PACKAGE_UNIT_NAME_MAX_LENGTH)

    Returns:
        PackageUnitValidationResult com is_valid, errors e warnings
    """
    if name_max_length is None:
        name_max_length = settings.PACKAGE_UNIT_NAME_MAX_LENGTH

    errors: List[str] = []
    warnings: List[str] = []

    if not units:
        return PackageUnitValidationResult(is_valid=False, errors=[EMPTY_CONFIGURATION_ERROR])

    duplicate_names = _duplicates([unit.unit_name for unit in units])
    if duplicate_names:
        errors.append(f"duplicate unit names: {', '.join(duplicate_names)}")

    duplicate_values = _duplicates([unit.unit_value for unit in units])
    if duplicate_values:
        errors.append(f"duplicate unit values: {', '.join(str(v) for v in duplicate_values)}")

    base_units = [unit for unit in units if unit.is_base_unit]
    if len(base_units) > 1:
        errors.append(MULTIPLE_BASE_UNITS_ERROR)
    elif len(base_units) == 1 and base_units[0].unit_value != 1:
        warnings.append(BASE_UNIT_VALUE_WARNING)

    for unit in units:
        name = unit.unit_name
        if not name or not name.strip() or len(name) > name_max_length:
            errors.append(f'unit name "{name}" must be between 1 and {name_max_length} characters')

        value = as_whole_number(unit.unit_value)
        if value is None or value <= 0:
            errors.append(f'unit "{name}" value must be a positive integer')

    if not errors:
        ordered = sorted(units, key=lambda u: u.unit_value, reverse=True)
        for larger, smaller in zip(ordered, ordered[1:]):
            if int(larger.unit_value) % int(smaller.unit_value) != 0:
                warnings.append(
                    f"{larger.unit_name}({int(larger.unit_value)}) is not divisible by "
                    f"{smaller.unit_name}({int(smaller.unit_value)}); package display may be inexact"
                )

    if errors:
        logger.debug(f"Package unit configuration rejected: {errors}")

    return PackageUnitValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )
