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

"""Tests for tolerance-based point welding."""

import torch

from navborder.mesh.utilities import (
    compute_canonical_indices,
    find_duplicate_pairs,
    vectorized_connected_components,
)


class TestFindDuplicatePairs:
    """Tests for pairwise coincidence detection."""

    def test_no_duplicates(self):
        points = torch.tensor([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        assert find_duplicate_pairs(points, tolerance=1e-5).shape == (0, 2)

    def test_pairs_are_ordered(self):
        points = torch.tensor([[1.0, 0.0, 0.0], [0.0, 0.0, 0.0], [1.0, 0.0, 1e-7]])
        pairs = find_duplicate_pairs(points, tolerance=1e-5)
        assert pairs.tolist() == [[0, 2]]

    def test_single_point(self):
        assert find_duplicate_pairs(torch.zeros(1, 3), tolerance=1e-5).shape == (0, 2)


class TestConnectedComponents:
    """Tests for union-find clustering."""

    def test_chain_collapses_to_smallest_index(self):
        pairs = torch.tensor([[3, 4], [2, 3], [0, 2]])
        labels = vectorized_connected_components(pairs, n_elements=6)
        assert labels.tolist() == [0, 1, 0, 0, 0, 5]

    def test_no_pairs_is_identity(self):
        labels = vectorized_connected_components(
            torch.empty((0, 2), dtype=torch.long), n_elements=3
        )
        assert labels.tolist() == [0, 1, 2]


class TestCanonicalIndices:
    """Tests for mapping points to cluster representatives."""

    def test_coincident_seam_vertices_weld(self):
        points = torch.tensor(
            [
                [0.0, 0.0, 0.0],
                [1.0, 0.0, 0.0],
                [0.0, 0.0, 2e-6],  # duplicate of 0 within tolerance
                [1.0, 0.0, 1.0],
            ]
        )
        canonical = compute_canonical_indices(points, tolerance=1e-5)
        assert canonical.tolist() == [0, 1, 0, 3]

    def test_distant_points_stay_apart(self):
        points = torch.tensor([[0.0, 0.0, 0.0], [0.0, 0.0, 1e-3]])
        assert compute_canonical_indices(points, tolerance=1e-5).tolist() == [0, 1]

    def test_empty(self):
        assert compute_canonical_indices(torch.empty(0, 3), tolerance=1e-5).numel() == 0
