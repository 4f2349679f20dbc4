"""Tests for analog-to-digital layout transforms."""

import math

import pytest
from scipy import signal as scipy_signal

from torchiir.filter_design import (
    ConjugatePair,
    InvalidCutoffError,
    MatchedPair,
    NyquistViolationError,
    RealSingle,
    bandpass_transform,
    bandstop_transform,
    chebyshev_type_2_prototype,
    chebyshev_type_2_shelf_prototype,
    highpass_transform,
    lowpass_transform,
)


def _assert_same_roots(actual, expected, tol=1e-8) -> None:
    assert len(actual) == len(expected)
    remaining = list(expected)
    for a in actual:
        distances = [abs(a - e) for e in remaining]
        i = min(range(len(remaining)), key=distances.__getitem__)
        assert distances[i] < tol, f"{a} has no match in {remaining}"
        remaining.pop(i)


class TestLowpassTransform:
    """Tests for lowpass_transform."""

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 7])
    @pytest.mark.parametrize("cutoff", [0.01, 0.1, 0.3, 0.45])
    def test_matches_scipy_zpk(self, order: int, cutoff: float) -> None:
        """Digital roots equal those of scipy.signal.cheby2."""
        analog = chebyshev_type_2_prototype(order, 40.0)
        digital = lowpass_transform(analog, cutoff)

        z_sp, p_sp, _ = scipy_signal.cheby2(
            order, 40.0, 2 * cutoff, btype="lowpass", output="zpk"
        )

        _assert_same_roots(digital.poles(), list(p_sp))
        # scipy places the zero of an odd-order filter at z = -1 as well
        zeros = digital.zeros()
        _assert_same_roots(
            [z for z in zeros if abs(z + 1) > 1e-12],
            [z for z in z_sp if abs(z + 1) > 1e-12],
        )

    def test_zero_at_infinity_maps_to_nyquist(self) -> None:
        digital = lowpass_transform(chebyshev_type_2_prototype(3, 30.0), 0.2)

        single = digital[-1]
        assert isinstance(single, RealSingle)
        assert single.zero == complex(-1.0, 0.0)

    def test_keeps_normalization(self) -> None:
        analog = chebyshev_type_2_shelf_prototype(2, 6.0, 0.5)
        digital = lowpass_transform(analog, 0.1)

        assert digital.digital
        assert digital.normal_w == analog.normal_w
        assert digital.normal_gain == analog.normal_gain

    @pytest.mark.parametrize("order", [2, 5])
    def test_poles_inside_unit_circle(self, order: int) -> None:
        digital = lowpass_transform(chebyshev_type_2_prototype(order, 60.0), 0.05)

        assert all(abs(p) < 1 for p in digital.poles())

    def test_does_not_modify_prototype(self) -> None:
        analog = chebyshev_type_2_prototype(4, 40.0)
        before = list(analog)

        lowpass_transform(analog, 0.2)

        assert list(analog) == before
        assert not analog.digital

    @pytest.mark.parametrize("cutoff", [0.0, 0.5, -0.1, 0.7, float("nan")])
    def test_invalid_cutoff(self, cutoff: float) -> None:
        with pytest.raises(InvalidCutoffError):
            lowpass_transform(chebyshev_type_2_prototype(2, 40.0), cutoff)


class TestHighpassTransform:
    """Tests for highpass_transform."""

    @pytest.mark.parametrize("order", [1, 2, 3, 6])
    @pytest.mark.parametrize("cutoff", [0.05, 0.2, 0.4])
    def test_matches_scipy_zpk(self, order: int, cutoff: float) -> None:
        analog = chebyshev_type_2_prototype(order, 30.0)
        digital = highpass_transform(analog, cutoff)

        z_sp, p_sp, _ = scipy_signal.cheby2(
            order, 30.0, 2 * cutoff, btype="highpass", output="zpk"
        )

        _assert_same_roots(digital.poles(), list(p_sp))
        _assert_same_roots(digital.zeros(), list(z_sp))

    def test_mirrors_normalization(self) -> None:
        digital = highpass_transform(chebyshev_type_2_prototype(2, 40.0), 0.1)
        assert digital.normal_w == pytest.approx(math.pi)

        shelf = highpass_transform(
            chebyshev_type_2_shelf_prototype(2, 6.0, 0.5), 0.1
        )
        assert shelf.normal_w == pytest.approx(0.0)

    def test_zero_at_infinity_maps_to_dc(self) -> None:
        digital = highpass_transform(chebyshev_type_2_prototype(1, 30.0), 0.2)

        assert digital[0].zero == complex(1.0, 0.0)


class TestBandpassTransform:
    """Tests for bandpass_transform."""

    @pytest.mark.parametrize("order", [1, 2, 3, 4])
    @pytest.mark.parametrize("center,width", [(0.1, 0.05), (0.25, 0.1), (0.35, 0.2)])
    def test_matches_scipy_zpk(self, order: int, center: float, width: float) -> None:
        analog = chebyshev_type_2_prototype(order, 40.0)
        digital = bandpass_transform(analog, center, width)

        edges = [2 * (center - width / 2), 2 * (center + width / 2)]
        z_sp, p_sp, _ = scipy_signal.cheby2(
            order, 40.0, edges, btype="bandpass", output="zpk"
        )

        _assert_same_roots(digital.poles(), list(p_sp), tol=1e-7)
        _assert_same_roots(digital.zeros(), list(z_sp), tol=1e-7)

    @pytest.mark.parametrize("order", [1, 2, 3, 5])
    def test_doubles_order(self, order: int) -> None:
        digital = bandpass_transform(chebyshev_type_2_prototype(order, 40.0), 0.2, 0.1)

        assert digital.num_poles == 2 * order
        assert sum(isinstance(e, ConjugatePair) for e in digital) == 2 * (order // 2)
        assert sum(isinstance(e, MatchedPair) for e in digital) == order % 2

    def test_normalization_at_band_center(self) -> None:
        center, width = 0.2, 0.1
        digital = bandpass_transform(chebyshev_type_2_prototype(2, 40.0), center, width)

        low = math.pi * (2 * center - width)
        high = math.pi * (2 * center + width)
        expected = 2 * math.atan(math.sqrt(math.tan(low / 2) * math.tan(high / 2)))
        assert digital.normal_w == pytest.approx(expected)
        assert digital.normal_gain == 1.0

    @pytest.mark.parametrize(
        "center,width,error",
        [
            (0.0, 0.1, InvalidCutoffError),
            (0.5, 0.1, InvalidCutoffError),
            (0.2, 0.0, InvalidCutoffError),
            (0.2, -0.1, InvalidCutoffError),
            (0.05, 0.2, NyquistViolationError),
            (0.45, 0.2, NyquistViolationError),
        ],
    )
    def test_invalid_band(self, center: float, width: float, error) -> None:
        with pytest.raises(error):
            bandpass_transform(chebyshev_type_2_prototype(2, 40.0), center, width)


class TestBandstopTransform:
    """Tests for bandstop_transform."""

    @pytest.mark.parametrize("order", [1, 2, 3, 4])
    @pytest.mark.parametrize("center,width", [(0.1, 0.05), (0.3, 0.1)])
    def test_matches_scipy_zpk(self, order: int, center: float, width: float) -> None:
        analog = chebyshev_type_2_prototype(order, 40.0)
        digital = bandstop_transform(analog, center, width)

        edges = [2 * (center - width / 2), 2 * (center + width / 2)]
        z_sp, p_sp, _ = scipy_signal.cheby2(
            order, 40.0, edges, btype="bandstop", output="zpk"
        )

        _assert_same_roots(digital.poles(), list(p_sp), tol=1e-7)
        _assert_same_roots(digital.zeros(), list(z_sp), tol=1e-7)

    @pytest.mark.parametrize("center,expected", [(0.1, math.pi), (0.24, math.pi), (0.25, 0.0), (0.4, 0.0)])
    def test_normalization_side(self, center: float, expected: float) -> None:
        digital = bandstop_transform(chebyshev_type_2_prototype(2, 40.0), center, 0.02)

        assert digital.normal_w == expected

    def test_zero_at_infinity_lands_on_unit_circle(self) -> None:
        digital = bandstop_transform(chebyshev_type_2_prototype(1, 40.0), 0.2, 0.05)

        (entry,) = list(digital)
        assert isinstance(entry, MatchedPair)
        for z in entry.zeros:
            assert abs(abs(z) - 1) < 1e-9
            assert abs(abs(math.atan2(z.imag, z.real)) - 2 * math.pi * 0.2) < 1e-2
