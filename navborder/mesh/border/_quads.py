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

"""Constant-width quads along boundary loops, mitred at shared corners.

Every boundary edge ``s -> e`` becomes a quad offset by half the border width
to both sides, perpendicular to the edge and to the up axis::

    side = normalize(cross(up, e - s)) * width / 2
    v1 = s + side    v3 = e + side
    v2 = s - side    v4 = e - side

Consecutive quads are then mitred: on each side, the end corner of the
previous quad and the start corner of the next one are both moved to the
intersection of their offset lines. Parallel offset lines have no
intersection and keep their un-mitred corners.
"""

from typing import Sequence

import torch

from navborder.mesh.geometry._intersection import (
    approximate_line_intersection,
    approximate_line_intersections,
)
from navborder.mesh.geometry._primitives import Edge, Point, Quad, edges_to_tensor
from navborder.mesh.utilities._tolerances import DEFAULT_TOLERANCE, safe_eps

DEFAULT_UP_AXIS = (0.0, 1.0, 0.0)


def edge_to_quad(
    edge: Edge, width: float, up_axis: Sequence[float] = DEFAULT_UP_AXIS
) -> Quad:
    """Un-mitred quad of total width ``width`` centred on ``edge``.

    Examples
    --------
    >>> quad = edge_to_quad(Edge(Point(0.0, 0.0, 0.0), Point(10.0, 0.0, 0.0)), 2.0)
    >>> quad.v1, quad.v4
    (Point(x=0.0, y=0.0, z=-1.0), Point(x=10.0, y=0.0, z=1.0))
    """
    up = Point(*(float(c) for c in up_axis))
    vector = edge.vector
    side = Point(
        up.y * vector.z - up.z * vector.y,
        up.z * vector.x - up.x * vector.z,
        up.x * vector.y - up.y * vector.x,
    ).normalized() * (width / 2)
    return Quad(edge.v1 + side, edge.v1 - side, edge.v2 + side, edge.v2 - side)


def mitre_quads(prev: Quad, curr: Quad) -> tuple[Quad, Quad]:
    """Mitre two consecutive quads at their shared corners.

    The ``v2 -> v4`` side line of ``prev`` is intersected with the
    ``v4 -> v2`` side line of ``curr``, and likewise ``v1 -> v3`` with
    ``v3 -> v1``. Each intersection replaces ``prev``'s end corner and
    ``curr``'s start corner on that side. Sides whose lines are parallel are
    left unchanged.

    Returns
    -------
    tuple[Quad, Quad]
        The updated ``(prev, curr)``.
    """
    negative = approximate_line_intersection(
        prev.v4, prev.v4 - prev.v2, curr.v2, curr.v2 - curr.v4
    )
    positive = approximate_line_intersection(
        prev.v3, prev.v3 - prev.v1, curr.v1, curr.v1 - curr.v3
    )
    if negative is not None:
        prev = prev.with_corner("v4", negative)
        curr = curr.with_corner("v2", negative)
    if positive is not None:
        prev = prev.with_corner("v3", positive)
        curr = curr.with_corner("v1", positive)
    return prev, curr


def loop_quad_tensor(
    edges: torch.Tensor,
    width: float,
    up_axis: Sequence[float] = DEFAULT_UP_AXIS,
    tolerance: float = DEFAULT_TOLERANCE,
) -> torch.Tensor:
    """Mitred quads for one closed loop, as a tensor.

    Parameters
    ----------
    edges : torch.Tensor
        Loop edges in order, shape (n_edges, 2, 3).
    width : float
        Full border width.
    up_axis : sequence of float
        World up direction.
    tolerance : float
        Edges shorter than this are skipped.

    Returns
    -------
    torch.Tensor
        Shape (n_quads, 4, 3) with corners ordered ``v1, v2, v3, v4``; one
        quad per non-degenerate edge, in loop order.
    """
    starts, ends = edges[:, 0], edges[:, 1]
    vectors = ends - starts
    keep = vectors.square().sum(dim=-1) >= tolerance * tolerance
    starts, ends, vectors = starts[keep], ends[keep], vectors[keep]
    n_quads = starts.shape[0]

    ### Un-mitred quads
    up = torch.as_tensor(up_axis, dtype=edges.dtype, device=edges.device)
    side = torch.linalg.cross(up.expand_as(vectors), vectors, dim=-1)
    side_norm = torch.linalg.vector_norm(side, dim=-1, keepdim=True)
    side = side / side_norm.clamp_min(safe_eps(side.dtype)) * (width / 2)
    quads = torch.stack(
        [starts + side, starts - side, ends + side, ends - side], dim=1
    )

    if n_quads < 2:
        return quads

    ### Mitre every seam, including last -> first
    # Mitred corners stay on their offset lines, so all seams can be solved
    # from the un-mitred quads at once.
    prev = quads.roll(1, dims=0)
    prev_vectors = vectors.roll(1, dims=0)
    negative = approximate_line_intersections(
        prev[:, 3], prev_vectors, quads[:, 1], -vectors
    )
    positive = approximate_line_intersections(
        prev[:, 2], prev_vectors, quads[:, 0], -vectors
    )
    negative_ok = torch.isfinite(negative).all(dim=-1, keepdim=True)
    positive_ok = torch.isfinite(positive).all(dim=-1, keepdim=True)

    # Seam k joins quad k-1 (end corners v3/v4) to quad k (start corners v1/v2)
    mitred = quads.clone()
    mitred[:, 1] = torch.where(negative_ok, negative, quads[:, 1])
    mitred[:, 0] = torch.where(positive_ok, positive, quads[:, 0])
    mitred[:, 3] = torch.where(
        negative_ok.roll(-1, dims=0), negative.roll(-1, dims=0), quads[:, 3]
    )
    mitred[:, 2] = torch.where(
        positive_ok.roll(-1, dims=0), positive.roll(-1, dims=0), quads[:, 2]
    )
    return mitred


def build_border_quads(
    loop: Sequence[Edge],
    width: float,
    up_axis: Sequence[float] = DEFAULT_UP_AXIS,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[Quad]:
    """Mitred quads along one closed loop.

    Degenerate edges are skipped; every other edge yields one quad, mitred
    against its predecessor and, for the last quad, against the first.

    Examples
    --------
    >>> from navborder.mesh.geometry import EdgeLoop
    >>> a, b = Point(0.0, 0.0, 0.0), Point(10.0, 0.0, 0.0)
    >>> c, d = Point(10.0, 0.0, 10.0), Point(0.0, 0.0, 10.0)
    >>> loop = EdgeLoop([Edge(a, b), Edge(b, c), Edge(c, d), Edge(d, a)])
    >>> quads = build_border_quads(loop, width=2.0)
    >>> quads[0].v3 == quads[1].v1
    True
    """
    if len(loop) == 0:
        return []
    edges = edges_to_tensor(list(loop), dtype=torch.float64)
    return [
        Quad.from_tensor(quad)
        for quad in loop_quad_tensor(edges, width, up_axis, tolerance)
    ]
