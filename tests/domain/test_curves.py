"""Tests for CR curve evaluation and parsing."""

import pytest

from hitbloq_star_ratings.domain.curves import (
    BasicCurve,
    LinearCurve,
    apply_basic_curve,
    apply_curve,
    apply_linear_curve,
    parse_curve,
)
from hitbloq_star_ratings.exceptions import CurveConfigurationError, UnknownCurveTypeError


class TestBasicCurve:
    """Tests for the baseline/exponential curve."""

    def test_perfect_accuracy_with_defaults_is_one(self) -> None:
        assert apply_basic_curve(100.0, BasicCurve()) == 1.0

    def test_below_baseline_is_linear(self) -> None:
        assert apply_basic_curve(50.0, BasicCurve()) == pytest.approx(0.25)

    def test_branches_agree_at_baseline(self) -> None:
        curve = BasicCurve()
        at_baseline = curve.resolved_baseline * 100
        expected = curve.resolved_baseline * curve.resolved_cutoff

        assert apply_basic_curve(at_baseline, curve) == pytest.approx(expected)
        assert apply_basic_curve(at_baseline - 1e-9, curve) == pytest.approx(expected)

    def test_above_baseline_adds_exponential_bonus(self) -> None:
        curve = BasicCurve(baseline=0.8, cutoff=0.5, exponential=2.0)

        # 0.9 * 0.5 + 0.5 * ((90 - 80) / 20) ** 2
        assert apply_basic_curve(90.0, curve) == pytest.approx(0.575)

    def test_explicit_zero_is_not_replaced_by_default(self) -> None:
        curve = BasicCurve(baseline=0.0, cutoff=0.0)

        assert curve.resolved_baseline == 0.0
        assert curve.resolved_cutoff == 0.0
        assert apply_basic_curve(50.0, curve) == pytest.approx(0.5**2.5)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"baseline": 1.0},
            {"baseline": -0.1},
            {"cutoff": 1.5},
            {"exponential": 0.0},
        ],
    )
    def test_out_of_range_parameters_raise(self, kwargs: dict[str, float]) -> None:
        with pytest.raises(CurveConfigurationError):
            BasicCurve(**kwargs)


class TestLinearCurve:
    """Tests for the piecewise-linear curve."""

    @pytest.mark.parametrize(
        ("accuracy", "expected"),
        [
            (80.0, 0.5),
            (40.0, 0.25),
            (90.0, 0.75),
            (0.0, 0.0),
        ],
    )
    def test_default_points(self, accuracy: float, expected: float) -> None:
        assert apply_linear_curve(accuracy, LinearCurve()) == pytest.approx(expected)

    def test_last_point_and_beyond_clamp_to_last_value(self) -> None:
        curve = LinearCurve()

        assert apply_linear_curve(100.0, curve) == 1.0
        assert apply_linear_curve(104.2, curve) == 1.0

    def test_below_first_point_extends_first_segment(self) -> None:
        curve = LinearCurve(points=((0.5, 0.2), (1.0, 1.0)))

        assert apply_linear_curve(25.0, curve) == pytest.approx(-0.2)

    def test_fewer_than_two_points_raise(self) -> None:
        with pytest.raises(CurveConfigurationError):
            LinearCurve(points=((0.0, 0.0),))

    def test_unsorted_points_raise(self) -> None:
        with pytest.raises(CurveConfigurationError):
            LinearCurve(points=((0.0, 0.0), (0.9, 0.5), (0.8, 1.0)))

    def test_duplicate_accuracy_raises(self) -> None:
        with pytest.raises(CurveConfigurationError):
            LinearCurve(points=((0.0, 0.0), (0.8, 0.5), (0.8, 1.0)))


class TestApplyCurve:
    """Tests for curve dispatch."""

    def test_dispatches_on_curve_variant(self) -> None:
        assert apply_curve(100.0, BasicCurve()) == 1.0
        assert apply_curve(40.0, LinearCurve()) == pytest.approx(0.25)

    def test_unknown_curve_object_raises(self) -> None:
        with pytest.raises(UnknownCurveTypeError):
            apply_curve(90.0, object())  # type: ignore[arg-type]


class TestParseCurve:
    """Tests for building curves from API payloads."""

    def test_basic_with_missing_fields_uses_defaults(self) -> None:
        curve = parse_curve({"type": "basic"})

        assert curve == BasicCurve()

    def test_basic_keeps_explicit_values_including_zero(self) -> None:
        curve = parse_curve({"type": "basic", "baseline": 0.7, "cutoff": 0, "exponential": 3})

        assert curve == BasicCurve(baseline=0.7, cutoff=0.0, exponential=3.0)

    def test_basic_null_field_uses_default(self) -> None:
        curve = parse_curve({"type": "basic", "baseline": None})

        assert isinstance(curve, BasicCurve)
        assert curve.resolved_baseline == 0.78

    def test_linear_points(self) -> None:
        curve = parse_curve({"type": "linear", "points": [[0, 0], [0.9, 0.4], [1, 1]]})

        assert curve == LinearCurve(points=((0.0, 0.0), (0.9, 0.4), (1.0, 1.0)))

    def test_linear_without_points_uses_defaults(self) -> None:
        curve = parse_curve({"type": "linear"})

        assert isinstance(curve, LinearCurve)
        assert curve.resolved_points == ((0.0, 0.0), (0.8, 0.5), (1.0, 1.0))

    @pytest.mark.parametrize("payload", [{"type": "sigmoid"}, {}])
    def test_unknown_type_raises(self, payload: dict[str, object]) -> None:
        with pytest.raises(UnknownCurveTypeError):
            parse_curve(payload)

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "basic", "baseline": "high"},
            {"type": "basic", "cutoff": True},
            {"type": "linear", "points": "0,0;1,1"},
            {"type": "linear", "points": [[0, 0], [1]]},
            {"type": "linear", "points": [[0, 0]]},
        ],
    )
    def test_malformed_parameters_raise(self, payload: dict[str, object]) -> None:
        with pytest.raises(CurveConfigurationError):
            parse_curve(payload)
