# SPDX-FileCopyrightText: Copyright (c) 2023 - 2026 NVIDIA CORPORATION & AFFILIATES.
# SPDX-FileCopyrightText: All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for ordering boundary edges into closed loops."""

import warnings

import pytest
from _mesh_helpers import edge, polygon_loop, undirected_keys

from navborder.mesh.boundaries import (
    build_edge_loops,
    get_outer_edge_loops,
    trace_edge_chains,
)
from navborder.mesh.geometry import EdgeLoop
from navborder.mesh.primitives.planar import l_shape, square, square_with_hole, strip


class TestTraceEdgeChains:
    """Tests for trace_edge_chains."""

    def test_shuffled_square(self):
        edges = [edge(10, 10, 0, 10), edge(0, 0, 10, 0), edge(0, 10, 0, 0), edge(10, 0, 10, 10)]
        loops, open_chains = trace_edge_chains(edges)
        assert open_chains == []
        assert len(loops) == 1
        assert loops[0].edges == (
            edge(10, 10, 0, 10),
            edge(0, 10, 0, 0),
            edge(0, 0, 10, 0),
            edge(10, 0, 10, 10),
        )

    def test_reversed_edges_are_aligned(self):
        edges = [edge(0, 0, 1, 0), edge(0, 0, 0, 1), edge(1, 0, 0, 1)]
        loops, _ = trace_edge_chains(edges)
        assert loops[0].edges == (edge(0, 0, 1, 0), edge(1, 0, 0, 1), edge(0, 1, 0, 0))
        assert loops[0].is_closed()

    def test_open_chain_reported(self):
        edges = [edge(0, 0, 1, 0), edge(1, 0, 1, 1)]
        loops, open_chains = trace_edge_chains(edges)
        assert loops == []
        assert open_chains == [edges]

    def test_every_edge_used_once(self):
        edges = list(polygon_loop([(0, 0), (4, 0), (4, 4), (0, 4)]))
        edges += list(polygon_loop([(1, 1), (1, 2), (2, 2), (2, 1)]))
        edges += [edge(8, 8, 9, 8)]
        loops, open_chains = trace_edge_chains(edges)
        used = [e for loop in loops for e in loop] + [e for c in open_chains for e in c]
        assert undirected_keys(used) == undirected_keys(edges)

    def test_empty(self):
        assert trace_edge_chains([]) == ([], [])


class TestBuildEdgeLoops:
    """Tests for build_edge_loops."""

    def test_two_disjoint_loops_in_input_order(self):
        first = polygon_loop([(0, 0), (1, 0), (0, 1)])
        second = polygon_loop([(5, 5), (6, 5), (5, 6)])
        loops = build_edge_loops(list(first) + list(second))
        assert loops == [first, second]

    def test_interleaved_loops(self):
        first = list(polygon_loop([(0, 0), (1, 0), (0, 1)]))
        second = list(polygon_loop([(5, 5), (6, 5), (5, 6)]))
        edges = [first[0], second[2], first[2], second[0], first[1], second[1]]
        loops = build_edge_loops(edges)
        assert len(loops) == 2
        assert all(loop.is_closed() for loop in loops)
        assert [len(loop) for loop in loops] == [3, 3]

    def test_open_chain_warns_and_is_skipped(self):
        closed = list(polygon_loop([(0, 0), (1, 0), (0, 1)]))
        dangling = [edge(5, 5, 6, 5), edge(6, 5, 6, 6)]
        with pytest.warns(UserWarning, match="do not close"):
            loops = build_edge_loops(closed + dangling)
        assert loops == [EdgeLoop(closed)]

    def test_closed_input_does_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            build_edge_loops(list(polygon_loop([(0, 0), (1, 0), (0, 1)])))

    def test_tolerance_closes_gaps(self):
        edges = [edge(0, 0, 1, 0), edge(1, 0, 0, 1), edge(0, 1, 0, 1e-6)]
        loops = build_edge_loops(edges)
        assert len(loops) == 1
        assert loops[0].is_closed()


class TestGetOuterEdgeLoops:
    """Tests for loops extracted from whole meshes."""

    def test_square(self, device):
        loops = get_outer_edge_loops(square.load(size=10.0, subdivisions=1, device=device))
        assert len(loops) == 1
        assert len(loops[0]) == 4
        assert loops[0].is_closed()
        assert loops[0].length == pytest.approx(40.0)

    def test_square_with_hole_has_two_loops(self):
        loops = get_outer_edge_loops(square_with_hole.load(size=3.0))
        assert len(loops) == 2
        assert sorted(len(loop) for loop in loops) == [4, 4]
        assert sorted(loop.length for loop in loops) == pytest.approx([4.0, 12.0])
        assert all(loop.is_closed() for loop in loops)

    def test_l_shape_is_one_loop_of_six(self):
        loops = get_outer_edge_loops(l_shape.load(size=2.0))
        assert len(loops) == 1
        assert len(loops[0]) == 6
        assert loops[0].is_closed()

    def test_without_merging(self):
        loops = get_outer_edge_loops(strip.load(segments=4), remove_extending_edges=False)
        assert len(loops) == 1
        assert len(loops[0]) == 10

    def test_unit_square_sides(self):
        loops = get_outer_edge_loops(square.load(size=1.0))
        assert undirected_keys(loops[0]) == undirected_keys(
            [edge(0, 0, 1, 0), edge(1, 0, 1, 1), edge(1, 1, 0, 1), edge(0, 1, 0, 0)]
        )
