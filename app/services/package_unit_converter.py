"""
Conversão entre quantidade em unidades base e unidades de embalagem.

- to_display: 1635 -> "1盒 63排 5粒" (decomposição gulosa, maior unidade primeiro)
- to_base_quantity: "1盒 5排 3粒" -> 1053

Nenhuma das funções lança exceção nem acessa o banco: entradas inválidas
viram resultado zerado ou mensagens em errors.
"""
import re
import logging
from typing import Any, Dict, List, Optional, Sequence
from app.schemas.package_unit import (
    PackageUnitBase,
    PackageBreakdownItem,
    PackageDisplayResult,
    ParsedPackageInput,
    PackageInputParseResult,
)
from app.utils.numbers import as_whole_number

logger = logging.getLogger(__name__)

EMPTY_INPUT_ERROR = "input must not be empty"
UNPARSEABLE_INPUT_ERROR = "unparseable input format"
QUANTITY_TOO_LARGE_ERROR = "quantity is too large"

# Só dígitos ASCII: "１２" (largura total) não é quantidade
_DIGITS_ONLY = re.compile(r"[0-9]+")
# <dígitos><sequência sem dígitos e sem espaços>, ex: "12盒", "3strip"
_QUANTITY_TOKEN = re.compile(r"([0-9]+)([^0-9\s]+)")


def _active_units_by_value(units: Sequence[PackageUnitBase]) -> List[PackageUnitBase]:
    """Unidades ativas com valor inteiro positivo, da maior para a menor"""
    active = [
        unit for unit in units or []
        if unit.is_active and (as_whole_number(unit.unit_value) or 0) > 0
    ]
    return sorted(active, key=lambda u: u.unit_value, reverse=True)


def _parse_digits(digits: str) -> Optional[int]:
    """None quando a sequência passa do limite de conversão do int"""
    try:
        return int(digits)
    except ValueError:
        logger.debug(f"Digit run too long to convert: {len(digits)} digits")
        return None


def _join_display(items) -> str:
    return " ".join(f"{item.quantity}{item.unit_name}" for item in items)


def to_display(base_quantity: Any, units: Sequence[PackageUnitBase]) -> PackageDisplayResult:
    """
    Converte quantidade em unidades base para exibição em embalagens.

    Args:
        base_quantity: Quantidade em unidades base (inteiro >= 0)
        units: Configuração de unidades (apenas as ativas são usadas)

    Returns:
        PackageDisplayResult. Quantidade negativa ou não inteira vira 0.
        O resto menor que a menor unidade é descartado (ex: 5 com menor
        unidade 10 não aparece no breakdown).
    """
    config_used = list(units or [])
    quantity = as_whole_number(base_quantity)

    if quantity is None or quantity < 0:
        logger.debug(f"Invalid base quantity normalized to 0: {base_quantity!r}")
        return PackageDisplayResult(
            base_quantity=0,
            package_breakdown=[],
            display_text="0",
            config_used=config_used,
        )

    remaining = quantity
    breakdown: List[PackageBreakdownItem] = []

    for unit in _active_units_by_value(config_used):
        unit_value = int(unit.unit_value)
        if remaining >= unit_value:
            breakdown.append(PackageBreakdownItem(
                unit_name=unit.unit_name,
                quantity=remaining // unit_value,
                unit_value=unit_value,
            ))
            remaining = remaining % unit_value

    display_text = _join_display(breakdown) if breakdown else str(quantity)

    return PackageDisplayResult(
        base_quantity=quantity,
        package_breakdown=breakdown,
        display_text=display_text,
        config_used=config_used,
    )


def to_base_quantity(text: Any, units: Sequence[PackageUnitBase]) -> PackageInputParseResult:
    """
    Converte texto digitado pelo usuário para quantidade em unidades base.

    Formatos aceitos:
    - "1500": só dígitos, já é a quantidade base
    - "1盒 5排 3粒" ou "1盒5排": tokens <quantidade><nome da unidade>

    Nomes de unidade são comparados exatamente (case-sensitive) com as
    unidades ativas. Token com unidade desconhecida gera erro e é ignorado,
    os demais continuam sendo somados. Caracteres antes do primeiro dígito
    (ex: "#1盒") não formam token e são ignorados.

    Args:
        text: Entrada do usuário
        units: Configuração de unidades do produto

    Returns:
        PackageInputParseResult com base_quantity, parsed_input (ordem de
        digitação), display_text (só tokens reconhecidos) e errors
    """
    result = PackageInputParseResult()

    if not isinstance(text, str) or not text.strip():
        result.errors = [EMPTY_INPUT_ERROR]
        return result

    trimmed = text.strip()

    if _DIGITS_ONLY.fullmatch(trimmed):
        quantity = _parse_digits(trimmed)
        if quantity is None:
            result.errors = [QUANTITY_TOO_LARGE_ERROR]
            return result
        result.base_quantity = quantity
        result.display_text = str(quantity)
        return result

    unit_values: Dict[str, int] = {
        unit.unit_name: int(unit.unit_value) for unit in _active_units_by_value(units)
    }

    total = 0
    parsed: List[ParsedPackageInput] = []
    errors: List[str] = []

    for match in _QUANTITY_TOKEN.finditer(trimmed):
        quantity = _parse_digits(match.group(1))
        unit_name = match.group(2)

        if quantity is None:
            errors.append(f'{QUANTITY_TOO_LARGE_ERROR}: "{unit_name}"')
            continue

        unit_value: Optional[int] = unit_values.get(unit_name)
        if unit_value is None:
            logger.debug(f"Unknown package unit in input {trimmed!r}: {unit_name!r}")
            errors.append(f'unknown unit name: "{unit_name}"')
            continue

        total += quantity * unit_value
        parsed.append(ParsedPackageInput(unit_name=unit_name, quantity=quantity))

    if not parsed and not errors:
        errors.append(UNPARSEABLE_INPUT_ERROR)

    result.base_quantity = total
    result.parsed_input = parsed
    result.display_text = _join_display(parsed)
    result.errors = errors
    return result
