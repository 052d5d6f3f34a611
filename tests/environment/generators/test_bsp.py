"""Tests for binary space partition dungeons."""

from __future__ import annotations

import random

import numpy as np
import pytest

from mapforge.environment.generators import (
    BSPGenerator,
    BSPNode,
    GeneratorConfigError,
)
from mapforge.environment.tile_types import TileTypeID
from mapforge.util.coordinates import Rect


def _walk(node: BSPNode) -> list[BSPNode]:
    nodes = [node]
    if node.left is not None:
        nodes += _walk(node.left)
    if node.right is not None:
        nodes += _walk(node.right)
    return nodes


class TestBSPNode:
    def test_small_node_stays_leaf(self) -> None:
        node = BSPNode(Rect(0, 0, 10, 10))
        assert not node.split(random.Random(0), min_size=6)
        assert node.is_leaf()

    def test_split_children_tile_the_parent(self) -> None:
        parent = Rect(0, 0, 40, 20)
        node = BSPNode(parent)
        assert node.split(random.Random(0), min_size=6)
        assert node.left is not None and node.right is not None

        # A 2:1 rect always splits across its long axis
        assert node.left.rect.height == node.right.rect.height == 20
        assert node.left.rect.area + node.right.rect.area == parent.area
        assert node.right.rect.x == node.left.rect.x2

    def test_get_room_prefers_left_subtree(self) -> None:
        node = BSPNode(Rect(0, 0, 20, 10))
        node.left = BSPNode(Rect(0, 0, 10, 10), room=Rect(1, 1, 3, 3))
        node.right = BSPNode(Rect(10, 0, 10, 10), room=Rect(11, 1, 3, 3))
        assert node.get_room() == Rect(1, 1, 3, 3)
        assert BSPNode(Rect(0, 0, 5, 5)).get_room() is None


class TestBSPGenerator:
    def test_every_leaf_gets_a_room_with_gutter(self) -> None:
        gen = BSPGenerator(50, 50, seed=42)
        gen.generate()
        leaves = gen.leaves()

        assert len(leaves) == len(gen.rooms) > 1
        for leaf in leaves:
            assert leaf.room is not None
            assert leaf.rect.contains_rect(leaf.room, margin=gen.gutter)
            assert leaf.room.width >= gen.min_room_size
            assert leaf.room.height >= gen.min_room_size

    def test_tree_is_binary_and_leaves_fit_the_map(self) -> None:
        gen = BSPGenerator(60, 40, seed=5)
        gen.generate()
        assert gen.root is not None

        for node in _walk(gen.root):
            assert (node.left is None) == (node.right is None)

        leaf_area = sum(leaf.rect.area for leaf in gen.leaves())
        assert leaf_area <= gen.root.rect.area

    def test_rooms_are_floor(self) -> None:
        gen = BSPGenerator(50, 50, seed=9)
        tiles = gen.generate()
        for room in gen.rooms:
            assert np.all(tiles[room.x : room.x2, room.y : room.y2] == TileTypeID.FLOOR)

    def test_debug_summary_reports_room_coverage(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        gen = BSPGenerator(50, 50, seed=9)
        with caplog.at_level("DEBUG", logger="mapforge"):
            gen.generate()
        room_tiles = sum(room.area for room in gen.rooms)
        assert f"{room_tiles} of 2500 tiles in rooms" in caplog.text

    def test_same_seed_same_map(self) -> None:
        a = BSPGenerator(50, 50, seed="bsp").generate()
        b = BSPGenerator(50, 50, seed="bsp").generate()
        assert np.array_equal(a, b)

    def test_map_smaller_than_split_threshold_is_one_room(self) -> None:
        gen = BSPGenerator(8, 8, seed=1)
        gen.generate()
        assert len(gen.rooms) == 1

    def test_min_size_too_small_for_room(self) -> None:
        with pytest.raises(GeneratorConfigError):
            BSPGenerator(50, 50, min_size=4, gutter=1, min_room_size=3)

    def test_map_too_small(self) -> None:
        with pytest.raises(GeneratorConfigError):
            BSPGenerator(4, 50)
