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

"""Extraction of the directed sides of every triangle in a mesh.

Each triangle ``(a, b, c)`` contributes the edges ``a -> b``, ``b -> c`` and
``c -> a`` in that order. No deduplication happens here: a side shared by two
triangles appears twice (usually once per direction), which is what the
outer-boundary filter relies on.
"""

import torch

from navborder.mesh.geometry._primitives import Edge, edges_from_tensor
from navborder.mesh.mesh import Mesh

# Corner pairs (start, end) for the three sides of a triangle.
_TRIANGLE_SIDES = torch.tensor([[0, 1], [1, 2], [2, 0]], dtype=torch.int64)


def extract_edge_index_pairs(mesh: Mesh) -> torch.Tensor:
    """Directed triangle sides as vertex-index pairs.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh.

    Returns
    -------
    torch.Tensor
        Shape (3 * n_cells, 2). Rows ``3 * i``, ``3 * i + 1`` and ``3 * i + 2``
        are the sides of cell ``i``.

    Raises
    ------
    ValueError
        If the mesh is not made of triangles.

    Examples
    --------
    >>> mesh = Mesh.from_triangulation(
    ...     [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]], [0, 2, 1]
    ... )
    >>> extract_edge_index_pairs(mesh)
    tensor([[0, 2],
            [2, 1],
            [1, 0]])
    """
    if mesh.n_manifold_dims != 2:
        raise ValueError(
            f"edge extraction requires a triangle mesh, but got {mesh.n_manifold_dims=}."
        )
    sides = _TRIANGLE_SIDES.to(mesh.cells.device)
    # (n_cells, 3 sides, 2 endpoints)
    return mesh.cells[:, sides].reshape(-1, 2)


def extract_edge_tensor(mesh: Mesh) -> torch.Tensor:
    """Directed triangle sides as endpoint coordinates.

    Returns
    -------
    torch.Tensor
        Shape (3 * n_cells, 2, n_spatial_dims), in the same order as
        :func:`extract_edge_index_pairs`.
    """
    return mesh.points[extract_edge_index_pairs(mesh)]


def extract_edges(mesh: Mesh) -> list[Edge]:
    """One :class:`Edge` per triangle side, three per triangle, in cell order.

    Raises
    ------
    ValueError
        If the mesh is not a triangle mesh in 3D.
    """
    if not mesh.is_triangle_mesh:
        raise ValueError(
            f"edge extraction requires triangles in 3D, but got {mesh.n_manifold_dims=} and {mesh.n_spatial_dims=}."
        )
    return edges_from_tensor(extract_edge_tensor(mesh))
