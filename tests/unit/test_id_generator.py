"""Tests for sx_common.id_generator, datetime_utils and decimals."""
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from src.sx_common.datetime_utils import iso_or_none, utc_now
from src.sx_common.decimals import display, to_decimal
from src.sx_common.id_generator import SequentialIdGenerator, generate_order_id


class TestSequentialIdGenerator:
    def test_prefix(self) -> None:
        assert SequentialIdGenerator("ord_").next_id().startswith("ord_")

    def test_unique_ids(self) -> None:
        gen = SequentialIdGenerator("x")
        ids = {gen.next_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_monotonically_increasing(self) -> None:
        gen = SequentialIdGenerator("")
        prev = int(gen.next_id())
        for _ in range(100):
            current = int(gen.next_id())
            assert current > prev
            prev = current

    def test_module_level_generator(self) -> None:
        assert generate_order_id() != generate_order_id()


class TestUtcNow:
    def test_returns_aware_utc(self) -> None:
        now = utc_now()
        assert isinstance(now, datetime)
        assert now.tzinfo == UTC

    def test_iso_or_none(self) -> None:
        assert iso_or_none(None) is None
        assert iso_or_none(datetime(2026, 1, 2, tzinfo=UTC)) == "2026-01-02T00:00:00+00:00"


class TestDecimals:
    def test_float_goes_through_str(self) -> None:
        assert to_decimal(0.1) == Decimal("0.1")

    def test_passthrough_and_parse(self) -> None:
        d = Decimal("1.5")
        assert to_decimal(d) is d
        assert to_decimal("2.25") == Decimal("2.25")
        assert to_decimal(3) == Decimal("3")

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            to_decimal("abc")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("0.0500", "0.05"), ("100", "100"), ("0", "0"), ("0.000", "0"), ("1E-8", "0.00000001")],
    )
    def test_display(self, value: str, expected: str) -> None:
        assert display(Decimal(value)) == expected
