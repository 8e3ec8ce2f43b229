"""Axis domains for dot and line charts.

A domain is the ``[min, max]`` range an axis has to cover. Small
multiples either get one domain each ("independent", the default) or
share the union of all of them ("fixed") so magnitudes stay comparable
across blocks.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Literal

from asciiviz.errors import InvalidDataError
from asciiviz.series import AxisKind, Series

Axis = Literal["x", "y"]

DAY_MS = 86_400_000.0


@dataclass(frozen=True, slots=True)
class Domain:
    min: float
    max: float
    origin: float | None = field(default=None, compare=False)

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def padded(self) -> bool:
        """True when the domain was widened around a single value."""
        return self.origin is not None

    def widened(self, kind: AxisKind = "number") -> Domain:
        """Return a domain with a non-zero span.

        A single repeated value is padded by one day on date axes, and
        by 1% (or by 1 around zero) on number axes. That puts it on the
        middle row or column. The value itself is kept as ``origin``.
        """
        if self.span > 0:
            return self
        if kind == "date":
            pad = DAY_MS
        else:
            pad = abs(self.min) * 0.01 or 1.0
        return Domain(self.min - pad, self.max + pad, origin=self.min)


def compute_domain(values: Iterable[float]) -> Domain:
    values = list(values)
    if not values:
        raise InvalidDataError("Cannot compute a domain without values")
    return Domain(min(values), max(values))


def union_domains(domains: Iterable[Domain]) -> Domain:
    domains = list(domains)
    return Domain(min(d.min for d in domains), max(d.max for d in domains))


def series_domain(series: Series, axis: Axis) -> Domain:
    return compute_domain(series.keys if axis == "x" else series.values)


def resolve_domains(series: Sequence[Series], axis: Axis, fixed: bool = False) -> list[Domain]:
    """Return one domain per series, shared when *fixed* is set.

    The returned domains are already widened, so callers can divide by
    their span directly.
    """
    domains = [series_domain(s, axis) for s in series]
    if fixed and domains:
        shared = union_domains(domains)
        domains = [shared] * len(domains)
    kinds = [s.key_kind if axis == "x" else "number" for s in series]
    return [d.widened(kind) for d, kind in zip(domains, kinds)]
