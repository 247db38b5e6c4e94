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

"""Tests for border quad construction and mitring."""

import pytest
import torch
from _mesh_helpers import edge, polygon_loop, square_loop

from navborder.mesh.border import (
    build_border_quads,
    edge_to_quad,
    loop_quad_tensor,
    mitre_quads,
)
from navborder.mesh.geometry import EdgeLoop, Point, Quad


def _assert_point_close(actual: Point, expected: tuple[float, float, float]):
    assert tuple(actual) == pytest.approx(expected, abs=1e-9)


class TestEdgeToQuad:
    """Tests for un-mitred quads."""

    def test_offsets_perpendicular_to_edge_and_up(self):
        quad = edge_to_quad(edge(0, 0, 10, 0), width=2.0)
        assert quad == Quad(
            Point(0.0, 0.0, -1.0),
            Point(0.0, 0.0, 1.0),
            Point(10.0, 0.0, -1.0),
            Point(10.0, 0.0, 1.0),
        )

    def test_custom_up_axis(self):
        # Edge along X with +Z as up: offsets run along Y.
        quad = edge_to_quad(edge(0, 0, 4, 0), width=1.0, up_axis=(0.0, 0.0, 1.0))
        _assert_point_close(quad.v1, (0.0, 0.5, 0.0))
        _assert_point_close(quad.v2, (0.0, -0.5, 0.0))

    def test_width_independent_of_edge_length(self):
        quad = edge_to_quad(edge(0, 0, 0, 0.001), width=3.0)
        assert (quad.v1 - quad.v2).magnitude == pytest.approx(3.0)


class TestMitreQuads:
    """Tests for mitring two quads."""

    def test_right_angle(self):
        prev = edge_to_quad(edge(0, 0, 10, 0), width=2.0)
        curr = edge_to_quad(edge(10, 0, 10, 10), width=2.0)

        prev, curr = mitre_quads(prev, curr)

        _assert_point_close(prev.v3, (11.0, 0.0, -1.0))
        _assert_point_close(prev.v4, (9.0, 0.0, 1.0))
        assert prev.v3 == curr.v1
        assert prev.v4 == curr.v2
        # Far corners are untouched
        assert prev.v1 == Point(0.0, 0.0, -1.0)
        assert curr.v4 == Point(9.0, 0.0, 10.0)

    def test_parallel_quads_unchanged(self):
        prev = edge_to_quad(edge(0, 0, 5, 0), width=2.0)
        curr = edge_to_quad(edge(5, 0, 10, 0), width=2.0)
        assert mitre_quads(prev, curr) == (prev, curr)

    def test_inputs_not_mutated(self):
        prev = edge_to_quad(edge(0, 0, 10, 0), width=2.0)
        curr = edge_to_quad(edge(10, 0, 10, 10), width=2.0)
        before = (prev, curr)
        mitre_quads(prev, curr)
        assert (prev, curr) == before


class TestBuildBorderQuads:
    """Tests for mitred quads along whole loops."""

    def test_square_corners_shared(self):
        quads = build_border_quads(square_loop(10.0), width=2.0)
        assert len(quads) == 4
        for i in range(4):
            prev, curr = quads[i - 1], quads[i]
            _assert_point_close(curr.v1, tuple(prev.v3))
            _assert_point_close(curr.v2, tuple(prev.v4))

    def test_square_first_quad(self):
        quads = build_border_quads(square_loop(10.0), width=2.0)
        _assert_point_close(quads[0].v1, (-1.0, 0.0, -1.0))
        _assert_point_close(quads[0].v2, (1.0, 0.0, 1.0))
        _assert_point_close(quads[0].v3, (11.0, 0.0, -1.0))
        _assert_point_close(quads[0].v4, (9.0, 0.0, 1.0))

    def test_matches_pairwise_mitring(self):
        loop = polygon_loop([(0, 0), (6, 1), (7, 5), (2, 7), (-1, 3)])
        quads = [edge_to_quad(e, width=0.5) for e in loop]
        for i in range(len(quads)):
            quads[i - 1], quads[i] = mitre_quads(quads[i - 1], quads[i])

        result = build_border_quads(loop, width=0.5)
        torch.testing.assert_close(
            torch.tensor([list(map(list, q)) for q in result], dtype=torch.float64),
            torch.tensor([list(map(list, q)) for q in quads], dtype=torch.float64),
        )

    def test_degenerate_edge_skipped(self):
        loop = polygon_loop([(0, 0), (10, 0), (10, 0), (10, 10), (0, 10)])
        quads = build_border_quads(loop, width=2.0)
        assert len(quads) == 4
        _assert_point_close(quads[0].v3, (11.0, 0.0, -1.0))
        _assert_point_close(quads[1].v1, (11.0, 0.0, -1.0))

    def test_colinear_edges_keep_square_ends(self):
        loop = polygon_loop([(0, 0), (5, 0), (10, 0), (10, 10), (0, 10)])
        quads = build_border_quads(loop, width=2.0)
        assert len(quads) == 5
        _assert_point_close(quads[0].v3, (5.0, 0.0, -1.0))
        _assert_point_close(quads[1].v1, (5.0, 0.0, -1.0))

    def test_single_edge_not_mitred(self):
        loop = EdgeLoop([edge(0, 0, 10, 0)])
        assert build_border_quads(loop, width=2.0) == [
            edge_to_quad(edge(0, 0, 10, 0), width=2.0)
        ]

    def test_empty(self):
        assert build_border_quads([], width=1.0) == []


class TestLoopQuadTensor:
    """Tests for the tensor form used by mesh generation."""

    def test_shape_and_dtype(self):
        edges = square_loop(4.0).to_tensor(dtype=torch.float64)
        quads = loop_quad_tensor(edges, width=1.0)
        assert quads.shape == (4, 4, 3)
        assert quads.dtype == torch.float64

    def test_corners_lie_at_half_width(self):
        edges = square_loop(4.0).to_tensor(dtype=torch.float64)
        quads = loop_quad_tensor(edges, width=1.0)
        # Distance from each mitred corner to its own edge's line is 0.5.
        starts, ends = edges[:, 0], edges[:, 1]
        directions = torch.nn.functional.normalize(ends - starts, dim=-1)
        for corner in range(4):
            offset = quads[:, corner] - starts
            along = (offset * directions).sum(dim=-1, keepdim=True) * directions
            distance = torch.linalg.vector_norm(offset - along, dim=-1)
            torch.testing.assert_close(distance, torch.full((4,), 0.5, dtype=torch.float64))

    def test_all_degenerate(self):
        edges = torch.zeros(3, 2, 3, dtype=torch.float64)
        assert loop_quad_tensor(edges, width=1.0).shape == (0, 4, 3)
