import pytest

from asciiviz.errors import InvalidDataError
from asciiviz.scales import Domain, compute_domain, resolve_domains, union_domains
from asciiviz.series import Series


def test_compute_domain():
    assert compute_domain([3, 1, 2]) == Domain(1, 3)


def test_compute_domain_empty():
    with pytest.raises(InvalidDataError):
        compute_domain([])


def test_degenerate_domain_is_widened():
    assert Domain(100, 100).widened() == Domain(99, 101)
    assert Domain(0, 0).widened() == Domain(-1, 1)
    assert Domain(-50, -50).widened() == Domain(-50.5, -49.5)
    assert Domain(1, 2).widened() == Domain(1, 2)


def test_union_domains():
    assert union_domains([Domain(0, 5), Domain(-2, 3)]) == Domain(-2, 5)


def _groups():
    return [
        Series((0.0, 1.0), (0.0, 10.0)),
        Series((0.0, 3.0), (5.0, 100.0)),
    ]


def test_independent_domains_differ():
    ys = resolve_domains(_groups(), "y")
    assert ys == [Domain(0, 10), Domain(5, 100)]
    xs = resolve_domains(_groups(), "x")
    assert xs == [Domain(0, 1), Domain(0, 3)]


def test_fixed_domains_are_shared():
    ys = resolve_domains(_groups(), "y", fixed=True)
    assert ys == [Domain(0, 100), Domain(0, 100)]
    xs = resolve_domains(_groups(), "x", fixed=True)
    assert xs[0] == xs[1] == Domain(0, 3)


def test_resolved_domains_never_have_zero_span():
    flat = [Series((1.0, 1.0), (7.0, 7.0))]
    (x,) = resolve_domains(flat, "x")
    (y,) = resolve_domains(flat, "y")
    assert x.span > 0 and y.span > 0


def test_single_date_is_padded_by_a_day():
    day = 1_704_067_200_000.0
    d = Domain(day, day).widened("date")
    assert d == Domain(day - 86_400_000, day + 86_400_000)
    assert d.padded
    assert d.origin == day


def test_date_keys_widen_by_a_day():
    (x,) = resolve_domains([Series((5e11, 5e11), (1.0, 2.0), "date")], "x")
    assert x.span == 2 * 86_400_000
    assert x.origin == 5e11


def test_spread_domains_are_not_padded():
    assert not Domain(1, 2).widened().padded
