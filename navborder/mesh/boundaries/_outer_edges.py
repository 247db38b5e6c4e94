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

"""Outer-boundary detection for navmesh triangulations.

An edge is on the outer boundary when exactly one triangle uses it. Edges are
compared undirected and with a distance tolerance, because two triangles
sharing a side traverse it in opposite directions and navmesh builders often
duplicate seam vertices.
"""

import logging
import warnings
from typing import Sequence

import torch

from navborder.mesh.boundaries._edge_extraction import extract_edges
from navborder.mesh.boundaries._extending_edges import merge_extending_edges
from navborder.mesh.geometry._primitives import Edge, edges_to_tensor
from navborder.mesh.mesh import Mesh
from navborder.mesh.utilities._duplicate_detection import compute_canonical_indices
from navborder.mesh.utilities._tolerances import DEFAULT_TOLERANCE, check_tolerance

logger = logging.getLogger(__name__)


def count_edge_occurrences(
    edges: Sequence[Edge], tolerance: float = DEFAULT_TOLERANCE
) -> tuple[torch.Tensor, torch.Tensor]:
    """Count how many edges in the multiset match each edge.

    Endpoints closer than ``tolerance`` are welded to one canonical index, so
    each edge becomes an unordered pair of canonical indices. Matching pairs
    are then counted with ``torch.unique``.

    Parameters
    ----------
    edges : sequence of Edge
        The edge multiset.
    tolerance : float
        Distance below which two endpoints are the same vertex.

    Returns
    -------
    tuple[torch.Tensor, torch.Tensor]
        ``(counts, degenerate)``, both shape (n_edges,). ``counts[i]`` is the
        number of non-degenerate edges matching edge ``i`` (including itself),
        and 0 for degenerate edges. ``degenerate[i]`` is True when edge ``i``
        is shorter than ``tolerance`` or both endpoints weld together.
    """
    tolerance = check_tolerance(tolerance)
    n_edges = len(edges)
    if n_edges == 0:
        empty = torch.empty(0, dtype=torch.long)
        return empty, empty.bool()

    tensor = edges_to_tensor(edges, dtype=torch.float64)
    sqr_lengths = (tensor[:, 1] - tensor[:, 0]).square().sum(dim=-1)

    ### Weld endpoints, then compare as sorted (undirected) index pairs
    canonical = compute_canonical_indices(tensor.reshape(-1, 3), tolerance)
    pairs = canonical.reshape(-1, 2).sort(dim=-1).values
    degenerate = (sqr_lengths < tolerance * tolerance) | (pairs[:, 0] == pairs[:, 1])

    counts = torch.zeros(n_edges, dtype=torch.long)
    if bool((~degenerate).any()):
        _, inverse, unique_counts = torch.unique(
            pairs[~degenerate],
            dim=0,
            return_inverse=True,
            return_counts=True,
        )
        counts[~degenerate] = unique_counts[inverse]
    return counts, degenerate


def filter_outer_edges(
    edges: Sequence[Edge], tolerance: float = DEFAULT_TOLERANCE
) -> list[Edge]:
    """Keep the edges that occur exactly once, compared undirected.

    Parameters
    ----------
    edges : sequence of Edge
        The edge multiset, e.g. from :func:`extract_edges`.
    tolerance : float
        Distance below which two endpoints are the same vertex.

    Returns
    -------
    list[Edge]
        Boundary edges in input order and original direction. Degenerate
        edges are never returned.

    Warns
    -----
    UserWarning
        If some edge is used by more than two triangles. Such non-manifold
        edges are dropped like interior ones.

    Examples
    --------
    >>> from navborder.mesh.geometry import Point
    >>> a, b, c = Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0), Point(0.0, 0.0, 1.0)
    >>> edges = [Edge(a, b), Edge(b, c), Edge(c, b), Edge(c, a)]
    >>> filter_outer_edges(edges) == [Edge(a, b), Edge(c, a)]
    True
    """
    counts, degenerate = count_edge_occurrences(edges, tolerance)
    if len(edges) == 0:
        return []

    n_non_manifold = int((counts > 2).sum())
    if n_non_manifold > 0:
        warnings.warn(
            f"{n_non_manifold} edge(s) are shared by more than two triangles. "
            "The mesh is non-manifold; those edges are treated as interior.",
            stacklevel=2,
        )

    keep = (counts == 1) & ~degenerate
    outer = [edges[i] for i in torch.nonzero(keep).flatten().tolist()]
    logger.debug(
        "outer edge filter: %d candidates, %d degenerate, %d on the boundary",
        len(edges),
        int(degenerate.sum()),
        len(outer),
    )
    return outer


def get_outer_edges(
    mesh: Mesh,
    remove_extending_edges: bool = True,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[Edge]:
    """Outer boundary edges of a triangle mesh.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh in 3D.
    remove_extending_edges : bool
        Merge colinear boundary edges that touch end to start, see
        :func:`merge_extending_edges`.
    tolerance : float
        Distance below which two endpoints are the same vertex.

    Returns
    -------
    list[Edge]
        Unordered boundary edges, each in the direction of its triangle.
    """
    edges = extract_edges(mesh)
    outer = filter_outer_edges(edges, tolerance)
    if remove_extending_edges:
        # Merging runs on boundary candidates only. Interior runs merged
        # before filtering would no longer cancel against the unmerged
        # halves on the other side of a T-junction.
        outer = filter_outer_edges(merge_extending_edges(outer, tolerance), tolerance)
    return outer
