import pytest

from recipe_importer.models.ingredient import Unit
from recipe_importer.unit_converter import convert, convert_to_metric


@pytest.mark.parametrize("quantity,unit,expected", [
    (1, Unit.CUP, (237, Unit.ML)),
    (5, Unit.CUP, (1.18, Unit.L)),
    (1, Unit.FL_OZ, (30, Unit.ML)),
    (1, Unit.GALLON, (3.79, Unit.L)),
    (4, Unit.OZ, (113, Unit.G)),
    (1, Unit.LB, (454, Unit.G)),
    (3, Unit.LB, (1.36, Unit.KG)),
])
def test_convert_to_metric(quantity, unit, expected):
    assert convert_to_metric(quantity, unit) == expected


@pytest.mark.parametrize("unit", [Unit.TSP, Unit.TBSP, Unit.PINCH, Unit.DASH, Unit.PIECE, Unit.DOZEN, Unit.G])
def test_convert_to_metric_keeps_unit(unit):
    assert convert_to_metric(2, unit) == (2, unit)


def test_convert_to_metric_zero():
    assert convert_to_metric(0, Unit.CUP) == (0, Unit.CUP)


def test_convert_same_dimension():
    assert convert(1, Unit.L, Unit.ML) == pytest.approx(1000)
    assert convert(3, Unit.TSP, Unit.TBSP) == pytest.approx(1, rel=1e-3)
    assert convert(16, Unit.OZ, Unit.LB) == pytest.approx(1, rel=1e-3)
    assert convert(2, Unit.CUP, Unit.CUP) == 2


def test_convert_across_dimensions():
    assert convert(1, Unit.CUP, Unit.G) is None
    assert convert(1, Unit.PIECE, Unit.G) is None
