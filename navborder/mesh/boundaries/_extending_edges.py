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

"""Merging of colinear boundary edges split by mesh subdivision.

A navmesh builder that subdivides polygons leaves a straight boundary side as
several shorter colinear edges ("extending edges"). Each split point would
otherwise become a corner of the border strip. Edges are grouped by their
normalized direction; inside a group, two edges that touch end to start are
replaced by one edge spanning their far endpoints.

One pass merges at most one pair per direction group. :func:`merge_extending_edges`
repeats passes until nothing merges; every merge removes one edge, so this
terminates after fewer passes than there are edges.
"""

import enum
import logging
from typing import Sequence

import torch

from navborder.mesh.geometry._primitives import Edge, edges_to_tensor
from navborder.mesh.utilities._duplicate_detection import compute_canonical_indices
from navborder.mesh.utilities._tolerances import DEFAULT_TOLERANCE, check_tolerance

logger = logging.getLogger(__name__)


class ConnectionPoint(enum.Enum):
    """Where two same-direction edges touch."""

    HEAD_TO_TAIL = "head_to_tail"
    """``a.v2`` coincides with ``b.v1``: ``b`` continues ``a``."""

    TAIL_TO_HEAD = "tail_to_head"
    """``a.v1`` coincides with ``b.v2``: ``a`` continues ``b``."""


def classify_connection(
    a: Edge, b: Edge, tolerance: float = DEFAULT_TOLERANCE
) -> ConnectionPoint | None:
    """Classify how edge ``a`` connects to edge ``b``, if at all.

    Examples
    --------
    >>> from navborder.mesh.geometry import Point
    >>> a = Edge(Point(0.0, 0.0, 0.0), Point(5.0, 0.0, 0.0))
    >>> b = Edge(Point(5.0, 0.0, 0.0), Point(10.0, 0.0, 0.0))
    >>> classify_connection(a, b)
    <ConnectionPoint.HEAD_TO_TAIL: 'head_to_tail'>
    >>> classify_connection(b, a)
    <ConnectionPoint.TAIL_TO_HEAD: 'tail_to_head'>
    """
    if a.v2.isclose(b.v1, tolerance):
        return ConnectionPoint.HEAD_TO_TAIL
    if a.v1.isclose(b.v2, tolerance):
        return ConnectionPoint.TAIL_TO_HEAD
    return None


def _join(a: Edge, b: Edge, connection: ConnectionPoint) -> Edge:
    """Single edge spanning the far endpoints of two connected edges."""
    # Edges in one direction group already point the same way, but a
    # tolerance-welded group can still hold a reversed copy.
    if a.vector.dot(b.vector) < 0:
        b = b.reversed()
    if connection is ConnectionPoint.HEAD_TO_TAIL:
        return Edge(a.v1, b.v2)
    return Edge(b.v1, a.v2)


def group_edges_by_direction(
    edges: Sequence[Edge], tolerance: float = DEFAULT_TOLERANCE
) -> list[list[int]]:
    """Group edge positions by normalized direction.

    Opposite directions form separate groups. Degenerate edges belong to no
    group. Groups are ordered by their first member, and members keep input
    order.

    Returns
    -------
    list[list[int]]
        Positions into ``edges``, one list per direction.
    """
    if len(edges) == 0:
        return []
    tensor = edges_to_tensor(edges, dtype=torch.float64)
    vectors = tensor[:, 1] - tensor[:, 0]
    lengths = torch.linalg.vector_norm(vectors, dim=-1)
    valid = lengths * lengths >= tolerance * tolerance

    valid_positions = torch.nonzero(valid).flatten()
    if valid_positions.numel() == 0:
        return []
    directions = vectors[valid_positions] / lengths[valid_positions].unsqueeze(-1)
    labels = compute_canonical_indices(directions, tolerance)

    groups: dict[int, list[int]] = {}
    for position, label in zip(valid_positions.tolist(), labels.tolist()):
        groups.setdefault(label, []).append(position)
    return list(groups.values())


def _find_connected_pair(
    edges: Sequence[Edge], group: Sequence[int], tolerance: float
) -> tuple[int, int, ConnectionPoint] | None:
    """Last-first scan for one connected pair inside a direction group."""
    for i in range(len(group) - 1, 0, -1):
        edge = edges[group[i]]
        for j in range(i - 1, -1, -1):
            other = edges[group[j]]
            connection = classify_connection(edge, other, tolerance)
            if connection is not None:
                return group[i], group[j], connection
    return None


def find_extending_edges(
    edges: Sequence[Edge], tolerance: float = DEFAULT_TOLERANCE
) -> tuple[list[Edge], list[Edge], list[Edge]]:
    """Run one merge pass.

    Parameters
    ----------
    edges : sequence of Edge
        Candidate edges.
    tolerance : float
        Distance below which endpoints coincide and directions are equal.

    Returns
    -------
    tuple[list[Edge], list[Edge], list[Edge]]
        ``(remaining, extending, merged)``: edges not involved in a merge in
        input order, the pairs that were merged, and the merged edges in
        creation order.
    """
    tolerance = check_tolerance(tolerance)
    consumed: set[int] = set()
    extending: list[Edge] = []
    merged: list[Edge] = []

    for group in group_edges_by_direction(edges, tolerance):
        if len(group) < 2:
            continue
        found = _find_connected_pair(edges, group, tolerance)
        if found is None:
            continue
        i, j, connection = found
        consumed.update((i, j))
        extending.extend((edges[i], edges[j]))
        merged.append(_join(edges[i], edges[j], connection))

    remaining = [edge for k, edge in enumerate(edges) if k not in consumed]
    return remaining, extending, merged


def merge_extending_edges(
    edges: Sequence[Edge],
    tolerance: float = DEFAULT_TOLERANCE,
    single_pass: bool = False,
) -> list[Edge]:
    """Replace chains of colinear, touching edges by single edges.

    Parameters
    ----------
    edges : sequence of Edge
        Candidate edges, typically the outer boundary of a navmesh.
    tolerance : float
        Distance below which endpoints coincide and directions are equal.
    single_pass : bool
        Stop after one pass, merging at most one pair per direction group.
        By default passes repeat until no pair connects, which makes the
        result idempotent.

    Returns
    -------
    list[Edge]
        Untouched edges in input order followed by merged edges.

    Examples
    --------
    >>> from navborder.mesh.geometry import Point
    >>> edges = [
    ...     Edge(Point(0.0, 0.0, 0.0), Point(5.0, 0.0, 0.0)),
    ...     Edge(Point(5.0, 0.0, 0.0), Point(10.0, 0.0, 0.0)),
    ... ]
    >>> merge_extending_edges(edges)[0].length
    10.0
    """
    result = list(edges)
    n_passes = 0
    while True:
        remaining, _, merged = find_extending_edges(result, tolerance)
        n_passes += 1
        result = remaining + merged
        if single_pass or not merged:
            break

    logger.debug(
        "merged extending edges: %d -> %d edges in %d pass(es)",
        len(edges),
        len(result),
        n_passes,
    )
    return result
