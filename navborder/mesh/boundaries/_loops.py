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

"""Ordering of unordered boundary edges into closed, directed loops."""

import logging
import warnings
from typing import Sequence

from navborder.mesh.boundaries._outer_edges import get_outer_edges
from navborder.mesh.geometry._primitives import Edge, EdgeLoop
from navborder.mesh.mesh import Mesh
from navborder.mesh.utilities._tolerances import DEFAULT_TOLERANCE, check_tolerance

logger = logging.getLogger(__name__)


def _pop_next_edge(
    working: list[Edge], end: Edge, tolerance: float
) -> Edge | None:
    """Remove and return the first edge touching ``end.v2``, aligned to it."""
    for position, candidate in enumerate(working):
        if candidate.connects_to_point(end.v2, tolerance):
            del working[position]
            if candidate.starts_at(end.v2, tolerance):
                return candidate
            return candidate.reversed()
    return None


def trace_edge_chains(
    edges: Sequence[Edge], tolerance: float = DEFAULT_TOLERANCE
) -> tuple[list[EdgeLoop], list[list[Edge]]]:
    """Walk boundary edges into chains, separating closed loops from open ones.

    Starting from the first unused edge, the walk repeatedly appends the first
    remaining edge (in input order) that touches the current end point,
    reversing it when needed. When nothing touches the end point, the chain
    is a loop if the end point is the start of its first edge, and an open
    chain otherwise. The walk then restarts from the next unused edge.

    Where more than two boundary edges meet at one vertex, the result depends
    on input order.

    Parameters
    ----------
    edges : sequence of Edge
        Boundary edges in any order and direction.
    tolerance : float
        Distance below which two endpoints are the same vertex.

    Returns
    -------
    tuple[list[EdgeLoop], list[list[Edge]]]
        ``(loops, open_chains)``. Every edge of the input appears in exactly
        one of them.
    """
    tolerance = check_tolerance(tolerance)
    working = list(edges)
    loops: list[EdgeLoop] = []
    open_chains: list[list[Edge]] = []

    while working:
        chain = [working.pop(0)]
        while (next_edge := _pop_next_edge(working, chain[-1], tolerance)) is not None:
            chain.append(next_edge)

        if chain[-1].v2.isclose(chain[0].v1, tolerance):
            loops.append(EdgeLoop(chain))
        else:
            open_chains.append(chain)

    return loops, open_chains


def build_edge_loops(
    edges: Sequence[Edge], tolerance: float = DEFAULT_TOLERANCE
) -> list[EdgeLoop]:
    """Partition boundary edges into closed, directed loops.

    Open chains left by malformed input are reported with a warning and
    left out of the result.

    Parameters
    ----------
    edges : sequence of Edge
        Boundary edges in any order and direction.
    tolerance : float
        Distance below which two endpoints are the same vertex.

    Returns
    -------
    list[EdgeLoop]
        Closed loops, in the order their first edge appears in ``edges``.

    Examples
    --------
    >>> from navborder.mesh.geometry import Point
    >>> a, b, c = Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0), Point(0.0, 0.0, 1.0)
    >>> loops = build_edge_loops([Edge(a, b), Edge(a, c), Edge(b, c)])
    >>> len(loops), loops[0].is_closed()
    (1, True)
    >>> loops[0][2] == Edge(c, a)
    True
    """
    loops, open_chains = trace_edge_chains(edges, tolerance)
    if open_chains:
        warnings.warn(
            f"{len(open_chains)} boundary chain(s) with "
            f"{sum(len(chain) for chain in open_chains)} edge(s) do not close "
            "and were skipped. The boundary is probably non-manifold.",
            stacklevel=2,
        )
    logger.debug(
        "built %d edge loop(s) from %d edge(s), %d open chain(s)",
        len(loops),
        len(edges),
        len(open_chains),
    )
    return loops


def get_outer_edge_loops(
    mesh: Mesh,
    remove_extending_edges: bool = True,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[EdgeLoop]:
    """Closed loops along the outer boundary of a triangle mesh.

    A mesh with ``h`` holes in a single connected region produces ``h + 1``
    loops.

    Parameters
    ----------
    mesh : Mesh
        Triangle mesh in 3D.
    remove_extending_edges : bool
        Merge colinear boundary edges before building loops.
    tolerance : float
        Distance below which two endpoints are the same vertex.

    Returns
    -------
    list[EdgeLoop]
        One loop per closed boundary curve.
    """
    outer = get_outer_edges(
        mesh, remove_extending_edges=remove_extending_edges, tolerance=tolerance
    )
    return build_edge_loops(outer, tolerance)
