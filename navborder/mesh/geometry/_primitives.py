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

"""Immutable geometric value types shared by the boundary and border stages.

Bulk numeric work (edge extraction, welding, quad generation, UVs) happens on
tensors. The loop-building and merging stages, however, walk edges one at a
time, so edges are also exposed as small immutable values. All of them are
``NamedTuple`` subclasses: they hash, compare exactly, and can be stacked into
tensors with ``torch.tensor(...)``.

Transformations never mutate: :meth:`Edge.reversed` and
:meth:`Quad.with_corner` return new values, so an edge referenced from several
working lists cannot change under another one.
"""

import math
from typing import Iterator, NamedTuple, Sequence, overload

import torch

from navborder.mesh.utilities._tolerances import DEFAULT_TOLERANCE


class Point(NamedTuple):
    """A 3D coordinate."""

    x: float
    y: float
    z: float

    def __add__(self, other: "Point") -> "Point":  # type: ignore[override]
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Point":  # type: ignore[override]
        return Point(self.x * scalar, self.y * scalar, self.z * scalar)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y, -self.z)

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    @property
    def sqr_magnitude(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.sqr_magnitude)

    def normalized(self) -> "Point":
        """Unit vector in the same direction, or the zero vector."""
        length = self.magnitude
        if length == 0.0:
            return Point(0.0, 0.0, 0.0)
        return Point(self.x / length, self.y / length, self.z / length)

    def isclose(self, other: "Point", tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """True if the Euclidean distance to ``other`` is below ``tolerance``."""
        return (self - other).sqr_magnitude < tolerance * tolerance

    def to_tensor(self, dtype: torch.dtype | None = None) -> torch.Tensor:
        return torch.tensor(tuple(self), dtype=dtype)

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> "Point":
        x, y, z = tensor.tolist()
        return cls(x, y, z)


class Edge(NamedTuple):
    """A directed segment from ``v1`` to ``v2``."""

    v1: Point
    v2: Point

    @property
    def vector(self) -> Point:
        return self.v2 - self.v1

    @property
    def sqr_length(self) -> float:
        """Squared length, for cheap degeneracy checks without a square root."""
        return self.vector.sqr_magnitude

    @property
    def length(self) -> float:
        return math.sqrt(self.sqr_length)

    @property
    def direction(self) -> Point:
        return self.vector.normalized()

    def reversed(self) -> "Edge":
        """The same segment traversed from ``v2`` to ``v1``."""
        return Edge(self.v2, self.v1)

    def is_degenerate(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return self.sqr_length < tolerance * tolerance

    def connects_to_point(
        self, point: Point, tolerance: float = DEFAULT_TOLERANCE
    ) -> bool:
        """True if either endpoint coincides with ``point``."""
        return self.v1.isclose(point, tolerance) or self.v2.isclose(point, tolerance)

    def starts_at(self, point: Point, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return self.v1.isclose(point, tolerance)

    def undirected_isclose(
        self, other: "Edge", tolerance: float = DEFAULT_TOLERANCE
    ) -> bool:
        """True if ``other`` is this edge or its reverse, within tolerance."""
        if self.v1.isclose(other.v1, tolerance) and self.v2.isclose(other.v2, tolerance):
            return True
        return self.v1.isclose(other.v2, tolerance) and self.v2.isclose(
            other.v1, tolerance
        )

    def to_tensor(self, dtype: torch.dtype | None = None) -> torch.Tensor:
        """Shape (2, 3)."""
        return torch.tensor((tuple(self.v1), tuple(self.v2)), dtype=dtype)

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> "Edge":
        (x1, y1, z1), (x2, y2, z2) = tensor.tolist()
        return cls(Point(x1, y1, z1), Point(x2, y2, z2))


_QUAD_CORNERS = ("v1", "v2", "v3", "v4")


class Quad(NamedTuple):
    """One border segment.

    ``v1``/``v2`` are the start corners and ``v3``/``v4`` the end corners;
    ``v1``/``v3`` lie on the positive offset side, ``v2``/``v4`` on the
    negative one::

        v1 ------------- v3
         |   edge -->    |
        v2 ------------- v4
    """

    v1: Point
    v2: Point
    v3: Point
    v4: Point

    def with_corner(self, corner: str, point: Point) -> "Quad":
        """Return a copy with one corner (``"v1"`` .. ``"v4"``) replaced."""
        if corner not in _QUAD_CORNERS:
            raise ValueError(f"unknown quad corner {corner=}, expected one of {_QUAD_CORNERS}")
        return self._replace(**{corner: point})

    def with_corners(self, **corners: Point) -> "Quad":
        """Return a copy with several corners replaced."""
        for corner in corners:
            if corner not in _QUAD_CORNERS:
                raise ValueError(
                    f"unknown quad corner {corner=}, expected one of {_QUAD_CORNERS}"
                )
        return self._replace(**corners)

    def to_tensor(self, dtype: torch.dtype | None = None) -> torch.Tensor:
        """Shape (4, 3)."""
        return torch.tensor(tuple(tuple(corner) for corner in self), dtype=dtype)

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> "Quad":
        return cls(*(Point(*corner) for corner in tensor.tolist()))


class EdgeLoop(Sequence[Edge]):
    """An ordered, circular chain of edges.

    Each edge ends where the next one starts and the last edge ends where the
    first one starts. Loops are only created by the loop builder, which
    guarantees closure; the constructor only rejects empty loops.

    Examples
    --------
    >>> a, b, c = Point(0, 0, 0), Point(1, 0, 0), Point(0, 0, 1)
    >>> loop = EdgeLoop([Edge(a, b), Edge(b, c), Edge(c, a)])
    >>> len(loop), loop.is_closed()
    (3, True)
    """

    __slots__ = ("_edges",)

    def __init__(self, edges: Sequence[Edge]) -> None:
        self._edges = tuple(edges)
        if len(self._edges) == 0:
            raise ValueError("an EdgeLoop needs at least one edge")

    @overload
    def __getitem__(self, index: int) -> Edge: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Edge, ...]: ...

    def __getitem__(self, index):
        return self._edges[index]

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdgeLoop):
            return NotImplemented
        return self._edges == other._edges

    def __hash__(self) -> int:
        return hash(self._edges)

    def __repr__(self) -> str:
        return f"EdgeLoop(n_edges={len(self._edges)})"

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    @property
    def points(self) -> tuple[Point, ...]:
        """Start point of every edge, in loop order."""
        return tuple(edge.v1 for edge in self._edges)

    @property
    def length(self) -> float:
        return sum(edge.length for edge in self._edges)

    def is_closed(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """Check ``loop[i].v2 == loop[i + 1].v1`` for all i, cyclically."""
        n = len(self._edges)
        return all(
            self._edges[i].v2.isclose(self._edges[(i + 1) % n].v1, tolerance)
            for i in range(n)
        )

    def to_tensor(self, dtype: torch.dtype | None = None) -> torch.Tensor:
        """Shape (n_edges, 2, 3)."""
        return edges_to_tensor(self._edges, dtype=dtype)


def edges_to_tensor(
    edges: Sequence[Edge], dtype: torch.dtype | None = None
) -> torch.Tensor:
    """Stack edges into a tensor of shape (n_edges, 2, 3)."""
    if len(edges) == 0:
        return torch.empty((0, 2, 3), dtype=dtype or torch.get_default_dtype())
    return torch.tensor(
        [(tuple(edge.v1), tuple(edge.v2)) for edge in edges],
        dtype=dtype or torch.get_default_dtype(),
    )


def edges_from_tensor(tensor: torch.Tensor) -> list[Edge]:
    """Inverse of :func:`edges_to_tensor`."""
    return [
        Edge(Point(*v1), Point(*v2)) for v1, v2 in tensor.reshape(-1, 2, 3).tolist()
    ]
