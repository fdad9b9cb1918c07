from decimal import Decimal

import pytest

from perf_core.measure import DataAmount, Duration


def test_duration_unit_conversion() -> None:
    assert Duration.seconds(2).to_millis() == Decimal("2000")
    assert Duration.minutes("1.5").to_units("s") == Duration.seconds(90)
    assert Duration.hours(1).to_units("min").value == Decimal("60")
    assert Duration.millis(250).to_units("s").value == Decimal("0.25")


def test_data_amount_uses_binary_multiples() -> None:
    assert DataAmount.kbytes(1).to_bytes() == Decimal("1024")
    assert DataAmount.mbytes(2).to_units("kB").value == Decimal("2048")
    assert DataAmount.gbytes(1) == DataAmount.bytes(1024**3)


def test_amounts_compare_by_normalised_value() -> None:
    assert Duration.seconds(1) == Duration.millis(1000)
    assert hash(Duration.seconds(1)) == hash(Duration.millis(1000))
    assert Duration.millis(999) < Duration.seconds(1)
    assert max(DataAmount.kbytes(1), DataAmount.bytes(1000)) == DataAmount.kbytes(1)
    assert Duration.millis(1) != DataAmount.bytes(1)


def test_amount_arithmetic_keeps_left_units() -> None:
    total = Duration.seconds(1) + Duration.millis(500)
    assert total.units == "s"
    assert total.value == Decimal("1.5")

    difference = DataAmount.bytes(100) - DataAmount.bytes(300)
    assert abs(difference) == DataAmount.bytes(200)
    assert (Duration.millis(10) / 4) == Duration.millis("2.5")


def test_float_values_keep_their_decimal_form() -> None:
    assert Duration.millis(0.1).value == Decimal("0.1")


def test_unknown_units_are_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown units"):
        Duration(1, "fortnight")
    with pytest.raises(ValueError, match="Unknown units"):
        DataAmount.bytes(1).to_units("ms")


def test_mixing_kinds_is_rejected() -> None:
    with pytest.raises(TypeError):
        _ = Duration.millis(1) + DataAmount.bytes(1)
    with pytest.raises(TypeError):
        Duration.millis(True)


def test_string_form() -> None:
    assert str(Duration.millis(5000)) == "5000 ms"
    assert str(DataAmount.kbytes("1.5")) == "1.5 kB"
    assert repr(Duration.seconds(2)) == "Duration(2, 's')"
