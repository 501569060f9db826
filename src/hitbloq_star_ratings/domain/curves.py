"""CR curves: mapping an average accuracy to a curved value.

A pool's CR curve is either a basic curve (linear below a baseline accuracy,
exponential above it) or a piecewise-linear curve through configured points.

Usage example:
    from hitbloq_star_ratings.domain.curves import LinearCurve, apply_curve, parse_curve

    apply_curve(90.0, LinearCurve())  # 0.75
    curve = parse_curve({"type": "basic", "baseline": 0.8})
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..exceptions import CurveConfigurationError, UnknownCurveTypeError

DEFAULT_BASELINE = 0.78
DEFAULT_CUTOFF = 0.5
DEFAULT_EXPONENTIAL = 2.5
DEFAULT_LINEAR_POINTS: tuple[tuple[float, float], ...] = ((0.0, 0.0), (0.8, 0.5), (1.0, 1.0))


@dataclass(frozen=True)
class BasicCurve:
    """Linear below `baseline`, with an exponential bonus above it.

    Fields left as None fall back to the defaults. Zero is a real value.
    """

    baseline: float | None = None
    cutoff: float | None = None
    exponential: float | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.resolved_baseline < 1.0:
            raise CurveConfigurationError("Basic curve baseline must be in [0, 1).")
        if not 0.0 <= self.resolved_cutoff <= 1.0:
            raise CurveConfigurationError("Basic curve cutoff must be in [0, 1].")
        if self.resolved_exponential <= 0.0:
            raise CurveConfigurationError("Basic curve exponential must be positive.")

    @property
    def resolved_baseline(self) -> float:
        return DEFAULT_BASELINE if self.baseline is None else self.baseline

    @property
    def resolved_cutoff(self) -> float:
        return DEFAULT_CUTOFF if self.cutoff is None else self.cutoff

    @property
    def resolved_exponential(self) -> float:
        return DEFAULT_EXPONENTIAL if self.exponential is None else self.exponential


@dataclass(frozen=True)
class LinearCurve:
    """Piecewise-linear curve through (accuracy fraction, curved value) points."""

    points: tuple[tuple[float, float], ...] | None = None

    def __post_init__(self) -> None:
        points = self.resolved_points
        if len(points) < 2:
            raise CurveConfigurationError("Linear curve needs at least two points.")
        for (x_prev, _), (x_next, _) in zip(points, points[1:], strict=False):
            if x_next <= x_prev:
                raise CurveConfigurationError(
                    "Linear curve points must be sorted by strictly ascending accuracy."
                )

    @property
    def resolved_points(self) -> tuple[tuple[float, float], ...]:
        return DEFAULT_LINEAR_POINTS if self.points is None else self.points


CRCurve = BasicCurve | LinearCurve


def apply_basic_curve(accuracy: float, curve: BasicCurve) -> float:
    """Apply a basic curve to an accuracy percentage."""
    baseline = curve.resolved_baseline * 100
    cutoff = curve.resolved_cutoff
    exponential = curve.resolved_exponential

    if accuracy < baseline:
        return accuracy / 100 * cutoff
    return accuracy / 100 * cutoff + (1 - cutoff) * (
        (accuracy - baseline) / (100 - baseline)
    ) ** exponential


def apply_linear_curve(accuracy: float, curve: LinearCurve) -> float:
    """Interpolate an accuracy percentage along a linear curve.

    Accuracies below the first point extend the first segment; accuracies at or
    beyond the last point take the last point's value.
    """
    points = curve.resolved_points
    fraction = accuracy / 100

    index = next((i for i, (x, _) in enumerate(points) if fraction < x), len(points))
    if index == len(points):
        return points[-1][1]
    if index == 0:
        index = 1

    x_low, y_low = points[index - 1]
    x_high, y_high = points[index]
    t = (fraction - x_low) / (x_high - x_low)
    return y_low + t * (y_high - y_low)


def apply_curve(accuracy: float, curve: CRCurve) -> float:
    """Apply a pool's CR curve to an accuracy percentage."""
    match curve:
        case BasicCurve():
            return apply_basic_curve(accuracy, curve)
        case LinearCurve():
            return apply_linear_curve(accuracy, curve)
        case _:
            raise UnknownCurveTypeError(type(curve).__name__)


def _optional_float(payload: Mapping[str, object], key: str) -> float | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise CurveConfigurationError(f"Curve field {key!r} must be a number.")
    return float(value)


def _parse_points(value: object) -> tuple[tuple[float, float], ...] | None:
    if value is None:
        return None
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise CurveConfigurationError("Linear curve points must be a list of pairs.")
    points: list[tuple[float, float]] = []
    for raw_point in value:
        if (
            not isinstance(raw_point, Sequence)
            or isinstance(raw_point, str)
            or len(raw_point) != 2
            or not all(
                isinstance(item, int | float) and not isinstance(item, bool) for item in raw_point
            )
        ):
            raise CurveConfigurationError("Linear curve points must be [accuracy, value] pairs.")
        points.append((float(raw_point[0]), float(raw_point[1])))
    return tuple(points)


def parse_curve(payload: Mapping[str, object]) -> CRCurve:
    """Build a CR curve from its API representation.

    Raises:
        UnknownCurveTypeError: If `type` is not "basic" or "linear".
        CurveConfigurationError: If the parameters are malformed or out of range.
    """
    curve_type = payload.get("type")
    if curve_type == "basic":
        return BasicCurve(
            baseline=_optional_float(payload, "baseline"),
            cutoff=_optional_float(payload, "cutoff"),
            exponential=_optional_float(payload, "exponential"),
        )
    if curve_type == "linear":
        return LinearCurve(points=_parse_points(payload.get("points")))
    raise UnknownCurveTypeError(curve_type)
