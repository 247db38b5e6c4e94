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

"""Approximate intersection of infinite 3D lines."""

import torch

from navborder.mesh.geometry._primitives import Point

# Lines whose directions satisfy sin^2(angle) below this are parallel.
PARALLEL_SIN_SQUARED = 1e-10


def approximate_line_intersections(
    origins_a: torch.Tensor,
    directions_a: torch.Tensor,
    origins_b: torch.Tensor,
    directions_b: torch.Tensor,
) -> torch.Tensor:
    r"""Batched approximate intersection of pairs of infinite lines.

    Two lines in 3D rarely meet exactly once floating-point error is involved,
    so the intersection is taken as the midpoint of the shortest segment
    between them. For coplanar lines this is the exact intersection.

    With :math:`w = o_a - o_b`, the closest-point parameters are

    .. math::

        t = \frac{(d_a \cdot d_b)(d_b \cdot w) - (d_b \cdot d_b)(d_a \cdot w)}{D},
        \quad
        s = \frac{(d_a \cdot d_a)(d_b \cdot w) - (d_a \cdot d_b)(d_a \cdot w)}{D}

    where :math:`D = \|d_a \times d_b\|^2`.

    Parameters
    ----------
    origins_a, directions_a : torch.Tensor
        First lines, each shape (n, 3).
    origins_b, directions_b : torch.Tensor
        Second lines, each shape (n, 3).

    Returns
    -------
    torch.Tensor
        Shape (n, 3). Rows for parallel or zero-length directions are NaN.
    """
    w = origins_a - origins_b
    aa = (directions_a * directions_a).sum(dim=-1)
    ab = (directions_a * directions_b).sum(dim=-1)
    bb = (directions_b * directions_b).sum(dim=-1)
    aw = (directions_a * w).sum(dim=-1)
    bw = (directions_b * w).sum(dim=-1)

    denom = aa * bb - ab * ab
    parallel = ~(denom > PARALLEL_SIN_SQUARED * aa * bb)
    safe_denom = torch.where(parallel, torch.ones_like(denom), denom)

    t = (ab * bw - bb * aw) / safe_denom
    s = (aa * bw - ab * aw) / safe_denom

    closest_a = origins_a + t.unsqueeze(-1) * directions_a
    closest_b = origins_b + s.unsqueeze(-1) * directions_b
    midpoints = (closest_a + closest_b) / 2

    return torch.where(
        parallel.unsqueeze(-1), torch.full_like(midpoints, float("nan")), midpoints
    )


def approximate_line_intersection(
    origin_a: Point, direction_a: Point, origin_b: Point, direction_b: Point
) -> Point | None:
    """Single-pair version of :func:`approximate_line_intersections`.

    Returns
    -------
    Point or None
        The intersection, or ``None`` when the lines are parallel or the
        result is not finite.

    Examples
    --------
    >>> approximate_line_intersection(
    ...     Point(0.0, 0.0, 0.0), Point(1.0, 0.0, 0.0),
    ...     Point(2.0, 0.0, -1.0), Point(0.0, 0.0, 1.0),
    ... )
    Point(x=2.0, y=0.0, z=0.0)
    """
    result = approximate_line_intersections(
        torch.tensor([origin_a], dtype=torch.float64),
        torch.tensor([direction_a], dtype=torch.float64),
        torch.tensor([origin_b], dtype=torch.float64),
        torch.tensor([direction_b], dtype=torch.float64),
    )[0]
    if not bool(torch.isfinite(result).all()):
        return None
    return Point.from_tensor(result)
