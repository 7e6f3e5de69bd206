"""
Testes para a validação de configurações de unidades de embalagem
"""
import pytest
from app.schemas.package_unit import PackageUnitCreate
from app.services.package_unit_validator import (
    validate_package_units,
    EMPTY_CONFIGURATION_ERROR,
    MULTIPLE_BASE_UNITS_ERROR,
    BASE_UNIT_VALUE_WARNING,
)


@pytest.fixture
def package_units():
    """盒 = 1000 粒, 排 = 10 粒, 粒 é a unidade base"""
    return [
        PackageUnitCreate(unit_name="盒", unit_value=1000),
        PackageUnitCreate(unit_name="排", unit_value=10),
        PackageUnitCreate(unit_name="粒", unit_value=1, is_base_unit=True),
    ]


def test_valid_configuration(package_units):
    """Testa configuração válida sem avisos"""
    result = validate_package_units(package_units)

    assert result.is_valid is True
    assert result.errors == []
    assert result.warnings == []


def test_empty_configuration_is_invalid():
    """Testa que configuração vazia é rejeitada com um único erro"""
    result = validate_package_units([])

    assert result.is_valid is False
    assert result.errors == [EMPTY_CONFIGURATION_ERROR]
    assert result.warnings == []


def test_configuration_without_base_unit(package_units):
    """Testa que a unidade base é opcional"""
    units = [unit.model_copy(update={"is_base_unit": False}) for unit in package_units]

    result = validate_package_units(units)

    assert result.is_valid is True
    assert result.errors == []


def test_multiple_base_units(package_units):
    """Testa erro quando há mais de uma unidade base"""
    units = [unit.model_copy(update={"is_base_unit": True}) for unit in package_units]

    result = validate_package_units(units)

    assert result.is_valid is False
    assert MULTIPLE_BASE_UNITS_ERROR in result.errors


def test_base_unit_value_not_one_warns(package_units):
    """Testa aviso quando a unidade base não vale 1"""
    units = [
        unit.model_copy(update={"unit_value": 5}) if unit.is_base_unit else unit
        for unit in package_units
    ]

    result = validate_package_units(units)

    assert result.is_valid is True
    assert BASE_UNIT_VALUE_WARNING in result.warnings


def test_duplicate_unit_names(package_units):
    """Testa nome repetido com valores diferentes"""
    units = package_units + [PackageUnitCreate(unit_name="盒", unit_value=2000)]

    result = validate_package_units(units)

    assert result.is_valid is False
    assert "duplicate unit names: 盒" in result.errors


def test_all_duplicate_names_reported_once():
    """Testa que todos os nomes repetidos aparecem numa única mensagem, uma vez cada"""
    units = [
        PackageUnitCreate(unit_name="a", unit_value=1),
        PackageUnitCreate(unit_name="a", unit_value=2),
        PackageUnitCreate(unit_name="b", unit_value=3),
        PackageUnitCreate(unit_name="b", unit_value=4),
        PackageUnitCreate(unit_name="a", unit_value=5),
    ]

    result = validate_package_units(units)

    name_errors = [e for e in result.errors if e.startswith("duplicate unit names")]
    assert name_errors == ["duplicate unit names: a, b"]


def test_duplicate_unit_values(package_units):
    """Testa valor repetido (大排 e 排 valem 10)"""
    units = [
        PackageUnitCreate(unit_name="大排", unit_value=10),
        PackageUnitCreate(unit_name="排", unit_value=10),
        PackageUnitCreate(unit_name="粒", unit_value=1, is_base_unit=True),
    ]

    result = validate_package_units(units)

    assert result.is_valid is False
    assert result.errors == ["duplicate unit values: 10"]


def test_duplicate_names_and_values_reported_separately():
    """Testa que nomes e valores repetidos geram um erro por categoria"""
    units = [
        PackageUnitCreate(unit_name="盒", unit_value=10),
        PackageUnitCreate(unit_name="盒", unit_value=10),
    ]

    result = validate_package_units(units)

    assert result.errors == ["duplicate unit names: 盒", "duplicate unit values: 10"]


@pytest.mark.parametrize("bad_value", [-1, 0, 2.5, -3.0])
def test_value_must_be_positive_integer(package_units, bad_value):
    """Testa valores não positivos ou fracionários"""
    units = [package_units[0].model_copy(update={"unit_value": bad_value})] + package_units[1:]

    result = validate_package_units(units)

    assert result.is_valid is False
    assert 'unit "盒" value must be a positive integer' in result.errors


def test_each_invalid_value_reported():
    """Testa um erro por unidade inválida"""
    units = [
        PackageUnitCreate(unit_name="盒", unit_value=-1),
        PackageUnitCreate(unit_name="排", unit_value=0),
    ]

    result = validate_package_units(units)

    assert 'unit "盒" value must be a positive integer' in result.errors
    assert 'unit "排" value must be a positive integer' in result.errors


def test_integral_float_value_accepted():
    """Testa que 10.0 é aceito como inteiro"""
    units = [
        PackageUnitCreate(unit_name="盒", unit_value=1000),
        PackageUnitCreate(unit_name="排", unit_value=10.0),
    ]

    result = validate_package_units(units)

    assert result.is_valid is True


def test_divisibility_warning():
    """Testa aviso quando 盒(1000) não é divisível por 排(7)"""
    units = [
        PackageUnitCreate(unit_name="盒", unit_value=1000),
        PackageUnitCreate(unit_name="排", unit_value=7),
        PackageUnitCreate(unit_name="粒", unit_value=1, is_base_unit=True),
    ]

    result = validate_package_units(units)

    assert result.is_valid is True
    assert len(result.warnings) == 1
    assert "盒(1000)" in result.warnings[0]
    assert "排(7)" in result.warnings[0]


def test_divisibility_uses_value_order_not_input_order():
    """Testa que os pares são formados após ordenar por valor"""
    units = [
        PackageUnitCreate(unit_name="粒", unit_value=1),
        PackageUnitCreate(unit_name="盒", unit_value=100),
        PackageUnitCreate(unit_name="排", unit_value=30),
    ]

    result = validate_package_units(units)

    assert result.is_valid is True
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith("盒(100)")


def test_divisibility_skipped_when_errors():
    """Testa que não há aviso de divisibilidade se já houver erros"""
    units = [
        PackageUnitCreate(unit_name="盒", unit_value=1000),
        PackageUnitCreate(unit_name="排", unit_value=7),
        PackageUnitCreate(unit_name="粒", unit_value=-1),
    ]

    result = validate_package_units(units)

    assert result.is_valid is False
    assert result.warnings == []


@pytest.mark.parametrize("bad_name", ["", "   ", "x" * 51])
def test_unit_name_length(bad_name):
    """Testa nome vazio ou maior que o limite"""
    units = [PackageUnitCreate(unit_name=bad_name, unit_value=1)]

    result = validate_package_units(units)

    assert result.is_valid is False
    assert any("must be between 1 and 50 characters" in e for e in result.errors)


def test_unit_name_at_limit_is_valid():
    """Testa nome com exatamente 50 caracteres"""
    result = validate_package_units([PackageUnitCreate(unit_name="x" * 50, unit_value=1)])

    assert result.is_valid is True


def test_custom_name_limit():
    """Testa limite de nome informado explicitamente"""
    result = validate_package_units([PackageUnitCreate(unit_name="blister", unit_value=1)], name_max_length=3)

    assert result.is_valid is False


def test_validate_is_idempotent(package_units):
    """Testa que chamadas repetidas dão o mesmo resultado"""
    units = package_units + [PackageUnitCreate(unit_name="盒", unit_value=7)]

    first = validate_package_units(units)
    second = validate_package_units(units)

    assert first == second
    assert first.is_valid is False
