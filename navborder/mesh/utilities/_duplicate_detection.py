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

"""Coincident point detection ("welding") for edge endpoint sets.

Navigation-mesh triangulations frequently duplicate vertices along polygon
seams, so two triangles sharing a side do not necessarily share vertex
indices. Every stage that compares edges therefore first maps coordinates to
canonical indices:

1. Compute pairwise L2 distances block by block (``torch.cdist``).
2. Keep pairs ``i < j`` closer than ``tolerance``.
3. Cluster pairs into equivalence classes via vectorised union-find with
   path compression; the smallest index is the representative.
"""

import warnings

import torch

# Rows of the distance matrix evaluated at once.
_BLOCK_SIZE = 2048


def vectorized_connected_components(
    pairs: torch.Tensor, n_elements: int
) -> torch.Tensor:
    """Compute connected components from pairwise connections.

    Uses iterative vectorized union-find with path compression.

    Parameters
    ----------
    pairs : torch.Tensor
        Shape (n_pairs, 2). Each row is a pair of element indices that should
        be in the same component.
    n_elements : int
        Total number of elements.

    Returns
    -------
    torch.Tensor
        Shape (n_elements,). labels[i] is the canonical (smallest index)
        representative of element i's component.
    """
    device = pairs.device
    parent = torch.arange(n_elements, dtype=torch.long, device=device)

    if len(pairs) == 0:
        return parent

    ### Iterative union-find: repeat union + path compression until stable
    max_iterations = 100
    for _ in range(max_iterations):
        prev = parent.clone()

        # Union step: merge to smaller index, directly and through parents
        parent_a = parent[pairs[:, 0]]
        parent_b = parent[pairs[:, 1]]
        merge_from = torch.cat(
            [
                torch.maximum(pairs[:, 0], pairs[:, 1]),
                torch.maximum(parent_a, parent_b),
            ]
        )
        merge_to = torch.cat(
            [
                torch.minimum(pairs[:, 0], pairs[:, 1]),
                torch.minimum(parent_a, parent_b),
            ]
        )
        parent.scatter_reduce_(dim=0, index=merge_from, src=merge_to, reduce="amin")

        # Path compression
        parent = parent[parent]

        if torch.equal(parent, prev):
            break
    else:
        warnings.warn(
            f"Union-find did not converge in {max_iterations} iterations. "
            "This should not happen for valid meshes.",
            stacklevel=2,
        )

    return parent


def find_duplicate_pairs(points: torch.Tensor, tolerance: float) -> torch.Tensor:
    """Find all pairs of points whose L2 distance is below ``tolerance``.

    Parameters
    ----------
    points : torch.Tensor
        Point coordinates, shape (n_points, n_spatial_dims).
    tolerance : float
        Absolute distance threshold.

    Returns
    -------
    torch.Tensor
        Duplicate pairs, shape (n_pairs, 2) with ``pairs[:, 0] < pairs[:, 1]``.
        Empty (0, 2) tensor if no duplicates are found.
    """
    n_points = points.shape[0]
    device = points.device

    if n_points < 2:
        return torch.empty((0, 2), dtype=torch.long, device=device)

    found = []
    for start in range(0, n_points, _BLOCK_SIZE):
        block = points[start : start + _BLOCK_SIZE]
        distances = torch.cdist(block, points)  # (n_block, n_points)
        rows, cols = torch.nonzero(distances < tolerance, as_tuple=True)
        rows = rows + start
        keep = rows < cols
        if keep.any():
            found.append(torch.stack([rows[keep], cols[keep]], dim=1))

    if not found:
        return torch.empty((0, 2), dtype=torch.long, device=device)
    return torch.cat(found, dim=0)


def compute_canonical_indices(points: torch.Tensor, tolerance: float) -> torch.Tensor:
    """Map each point to the smallest-index representative in its cluster.

    Two points belong to the same cluster when they are connected by a
    chain of pairwise distances below ``tolerance`` (transitive closure).

    Parameters
    ----------
    points : torch.Tensor
        Point coordinates, shape (n_points, n_spatial_dims).
    tolerance : float
        Absolute distance threshold.

    Returns
    -------
    torch.Tensor
        Shape (n_points,). ``canonical[i]`` is the index of the canonical
        representative for point ``i``.

    Examples
    --------
    >>> points = torch.tensor([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1e-7]])
    >>> compute_canonical_indices(points, tolerance=1e-5)
    tensor([0, 1, 0])
    """
    n_points = points.shape[0]
    if n_points < 2:
        return torch.arange(n_points, device=points.device, dtype=torch.long)

    pairs = find_duplicate_pairs(points, tolerance)
    return vectorized_connected_components(pairs, n_points)
