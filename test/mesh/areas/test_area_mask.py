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

"""Tests for area-type selection of navmesh triangles."""

import pytest
import torch
from tensordict import TensorDict

from navborder.mesh import Mesh
from navborder.mesh.areas import (
    ALL_AREAS,
    area_mask_selection,
    filter_by_area_mask,
    remove_unused_points,
)
from navborder.mesh.primitives.planar import strip

### Helper Functions ###


def _tagged_strip(areas: list[int]) -> Mesh:
    mesh = strip.load(length=float(len(areas)) / 2, width=1.0, segments=len(areas) // 2)
    return Mesh(
        points=mesh.points,
        cells=mesh.cells,
        point_data={"uv": mesh.points[:, [0, 2]]},
        cell_data={"area_type": torch.tensor(areas)},
    )


class TestAreaMaskSelection:
    """Tests for the bit-mask test."""

    def test_bits(self):
        selected = area_mask_selection(torch.tensor([0, 1, 2, 3]), area_mask=0b0101)
        assert selected.tolist() == [True, False, True, False]

    def test_all_areas(self):
        selected = area_mask_selection(torch.arange(31), area_mask=ALL_AREAS)
        assert bool(selected.all())

    def test_high_area(self):
        selected = area_mask_selection(torch.tensor([30, 5]), area_mask=1 << 30)
        assert selected.tolist() == [True, False]


class TestRemoveUnusedPoints:
    """Tests for compaction after cell selection."""

    def test_reindexing_keeps_order(self):
        points = torch.tensor(
            [[0.0, 0.0, 0.0], [9.0, 9.0, 9.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]
        )
        cells = torch.tensor([[0, 3, 2]])
        point_data = TensorDict({"id": torch.arange(4)}, batch_size=[4])

        used_points, updated_cells, used_data, mapping = remove_unused_points(
            points, cells, point_data
        )

        assert used_points.tolist() == [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]
        assert updated_cells.tolist() == [[0, 2, 1]]
        assert used_data["id"].tolist() == [0, 2, 3]
        assert mapping.tolist() == [0, -1, 1, 2]

    def test_no_cells(self):
        used_points, updated_cells, _, mapping = remove_unused_points(
            torch.zeros(3, 3),
            torch.empty((0, 3), dtype=torch.long),
            TensorDict({}, batch_size=[3]),
        )
        assert used_points.shape == (0, 3)
        assert updated_cells.shape == (0, 3)
        assert mapping.tolist() == [-1, -1, -1]


class TestFilterByAreaMask:
    """Tests for filter_by_area_mask."""

    def test_all_areas_returns_mesh(self):
        mesh = _tagged_strip([0, 0, 1, 1])
        assert filter_by_area_mask(mesh) is mesh

    def test_selects_cells_and_compacts_points(self):
        mesh = _tagged_strip([0, 0, 1, 1])
        result = filter_by_area_mask(mesh, area_mask=1 << 1)

        assert result.n_cells == 2
        assert result.n_points == 4
        assert result.cell_data["area_type"].tolist() == [1, 1]
        assert int(result.cells.max()) == 3
        torch.testing.assert_close(
            result.point_data["uv"], result.points[:, [0, 2]]
        )
        # Two unit-length segments; the area-1 cells cover x in [1, 2]
        torch.testing.assert_close(result.points[:, 0].min(), torch.tensor(1.0))
        torch.testing.assert_close(result.points[:, 0].max(), torch.tensor(2.0))

    def test_cells_reference_same_coordinates(self):
        mesh = _tagged_strip([2, 0, 2, 0, 2, 2])
        result = filter_by_area_mask(mesh, area_mask=1 << 2)
        kept = mesh.cell_data["area_type"] == 2
        torch.testing.assert_close(result.points[result.cells], mesh.points[mesh.cells[kept]])

    def test_nothing_selected(self):
        result = filter_by_area_mask(_tagged_strip([0, 0]), area_mask=1 << 5)
        assert result.n_cells == 0
        assert result.n_points == 0

    def test_cache_dropped(self):
        mesh = _tagged_strip([0, 0, 1, 1])
        _ = mesh.face_normals
        result = filter_by_area_mask(mesh, area_mask=1)
        assert "_cache" not in result.cell_data.keys()

    def test_missing_area_type(self):
        mesh = strip.load(segments=2)
        with pytest.raises(KeyError, match="area_type"):
            filter_by_area_mask(mesh, area_mask=1)
