"""Tests for the analog low-shelf prototype."""

import math
import warnings

import pytest

from torchiir.filter_design import (
    ConjugatePair,
    DegenerateRippleWarning,
    InvalidGainError,
    InvalidOrderError,
    InvalidRippleError,
    RealSingle,
    chebyshev_type_2_shelf_prototype,
)


def _dc_gain_db(layout) -> float:
    """Analog response at s = 0 in decibels (unity leading coefficient)."""
    response = complex(1.0, 0.0)
    for z in layout.zeros():
        response *= -z
    for p in layout.poles():
        response /= -p
    return 20 * math.log10(abs(response))


class TestChebyshevType2ShelfPrototype:
    """Tests for chebyshev_type_2_shelf_prototype."""

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 5, 10, 11])
    def test_pole_and_zero_counts(self, order: int) -> None:
        layout = chebyshev_type_2_shelf_prototype(order, 6.0, 0.5)

        assert layout.num_poles == order
        assert len(layout.zeros()) == order

        entries = list(layout)
        assert all(isinstance(e, ConjugatePair) for e in entries[: order // 2])
        if order % 2 == 1:
            assert isinstance(entries[-1], RealSingle)
            assert entries[-1].zero.imag == 0.0

    @pytest.mark.parametrize("order", [1, 2, 3, 6])
    @pytest.mark.parametrize("gain_db", [-12.0, -3.0, 3.0, 12.0])
    def test_normalization(self, order: int, gain_db: float) -> None:
        """Shelf prototype is normalized to unity at pi."""
        layout = chebyshev_type_2_shelf_prototype(order, gain_db, 0.25)

        assert layout.normal_w == math.pi
        assert layout.normal_gain == 1.0

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 5, 8])
    @pytest.mark.parametrize("gain_db", [-18.0, -6.0, 6.0, 18.0])
    @pytest.mark.parametrize("ripple_db", [0.1, 1.0])
    def test_dc_gain_within_ripple(
        self, order: int, gain_db: float, ripple_db: float
    ) -> None:
        """DC gain lands inside the ripple band below the requested boost/cut."""
        layout = chebyshev_type_2_shelf_prototype(order, gain_db, ripple_db)

        dc_db = _dc_gain_db(layout)

        assert abs(dc_db - gain_db) <= ripple_db + 1e-9
        assert math.copysign(1.0, dc_db) == math.copysign(1.0, gain_db)

    @pytest.mark.parametrize("order", [1, 3, 5])
    def test_odd_order_hits_gain(self, order: int) -> None:
        """Odd orders reach the requested gain exactly at DC."""
        layout = chebyshev_type_2_shelf_prototype(order, 6.0, 0.5)

        assert abs(_dc_gain_db(layout) - 6.0) < 1e-9

    @pytest.mark.parametrize("order", [2, 4, 6])
    def test_even_order_sits_at_ripple_edge(self, order: int) -> None:
        """Even orders sit at the ripple-referenced gain at DC."""
        layout = chebyshev_type_2_shelf_prototype(order, 6.0, 0.5)

        assert abs(_dc_gain_db(layout) - 5.5) < 1e-9

    @pytest.mark.parametrize("order", [1, 2, 5])
    def test_stable(self, order: int) -> None:
        layout = chebyshev_type_2_shelf_prototype(order, -9.0, 0.5)

        assert all(p.real < 0 for p in layout.poles())

    def test_ripple_clamped_to_gain(self) -> None:
        """Ripple beyond the gain behaves like ripple equal to the gain."""
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DegenerateRippleWarning)
            clamped = chebyshev_type_2_shelf_prototype(3, -4.0, 10.0)
            equal = chebyshev_type_2_shelf_prototype(3, -4.0, 4.0)

        assert list(clamped) == list(equal)

    @pytest.mark.parametrize("order", [1, 2, 3, 4])
    @pytest.mark.parametrize("gain_db", [-6.0, 6.0])
    def test_degenerate_ripple_fallback(self, order: int, gain_db: float) -> None:
        """Ripple equal to the gain takes the eps = G - 1 branch and warns."""
        with pytest.warns(DegenerateRippleWarning, match="eps = G - 1"):
            layout = chebyshev_type_2_shelf_prototype(order, gain_db, 20.0)

        assert layout.num_poles == order
        for p in layout.poles():
            assert math.isfinite(p.real) and math.isfinite(p.imag)
        for z in layout.zeros():
            assert math.isfinite(z.real) and math.isfinite(z.imag)
        assert layout.normal_w == math.pi

    def test_no_warning_on_regular_branch(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error", DegenerateRippleWarning)
            chebyshev_type_2_shelf_prototype(4, 6.0, 1.0)

    def test_repeatable(self) -> None:
        first = chebyshev_type_2_shelf_prototype(5, -7.5, 0.3)
        second = chebyshev_type_2_shelf_prototype(5, -7.5, 0.3)

        assert list(first) == list(second)


class TestChebyshevType2ShelfPrototypeErrors:
    """Tests for argument validation."""

    def test_zero_gain(self) -> None:
        with pytest.raises(InvalidGainError):
            chebyshev_type_2_shelf_prototype(4, 0.0, 1.0)

    @pytest.mark.parametrize("ripple_db", [0.0, -0.5, float("nan")])
    def test_invalid_ripple(self, ripple_db: float) -> None:
        with pytest.raises(InvalidRippleError):
            chebyshev_type_2_shelf_prototype(4, 6.0, ripple_db)

    @pytest.mark.parametrize("order", [0, -2, 1.5])
    def test_invalid_order(self, order) -> None:
        with pytest.raises(InvalidOrderError):
            chebyshev_type_2_shelf_prototype(order, 6.0, 1.0)
