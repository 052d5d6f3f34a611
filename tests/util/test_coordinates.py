from __future__ import annotations

import pytest

from mapforge.util.coordinates import Rect, is_carvable_tile_pos, is_interior_tile_pos


def test_rect_edges_and_center() -> None:
    r = Rect(2, 3, 4, 5)
    assert (r.x2, r.y2) == (6, 8)
    assert r.area == 20
    assert r.center() == (4, 5)


def test_rect_rejects_degenerate_shapes() -> None:
    with pytest.raises(ValueError):
        Rect(0, 0, 0, 3)
    with pytest.raises(ValueError):
        Rect(-1, 0, 3, 3)


def test_intersects_is_reflexive_and_symmetric() -> None:
    a = Rect(1, 1, 4, 4)
    b = Rect(3, 2, 5, 5)
    assert a.intersects(a)
    assert a.intersects(b)
    assert b.intersects(a)


def test_edge_and_corner_contact_counts_as_intersection() -> None:
    a = Rect(1, 1, 4, 4)  # spans [1, 5] on both axes
    edge = Rect(5, 1, 3, 3)
    corner = Rect(5, 5, 2, 2)
    assert a.intersects(edge)
    assert edge.intersects(a)
    assert a.intersects(corner)
    assert corner.intersects(a)


def test_separated_rects_do_not_intersect() -> None:
    a = Rect(1, 1, 4, 4)
    b = Rect(6, 1, 3, 3)
    assert not a.intersects(b)
    assert not b.intersects(a)


def test_contains_rect_with_margin() -> None:
    outer = Rect(0, 0, 10, 10)
    assert outer.contains_rect(Rect(1, 1, 8, 8), margin=1)
    assert not outer.contains_rect(Rect(0, 1, 8, 8), margin=1)
    assert outer.contains_rect(Rect(0, 0, 10, 10))


def test_bounds_helpers() -> None:
    assert is_carvable_tile_pos((4, 4), 5, 5)
    assert not is_carvable_tile_pos((0, 2), 5, 5)
    assert not is_carvable_tile_pos((5, 2), 5, 5)

    assert is_interior_tile_pos((3, 3), 5, 5)
    assert not is_interior_tile_pos((4, 3), 5, 5)
    assert not is_interior_tile_pos((2, 0), 5, 5)
