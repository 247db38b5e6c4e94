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

from typing import TYPE_CHECKING, Any, Self, Sequence

import torch
from tensordict import TensorDict, tensorclass

from navborder.mesh.utilities._cache import CACHE_KEY, get_cached, set_cached
from navborder.mesh.utilities.mesh_repr import format_mesh_repr


@tensorclass(tensor_only=True)
class Mesh:
    r"""A PyTorch-based simplicial mesh, used here for navigation surfaces.

    A navigation mesh is a triangulated walkable surface: a set of vertex
    positions in 3D and a set of triangles indexing into them. The same
    container is used for the input surface and for the generated border
    strip, so the whole pipeline speaks one type.

    **Core Data Structure**

    - ``points``: Vertex coordinates with shape :math:`(N_p, D_s)`. For a
      navigation mesh :math:`D_s = 3` with +Y as the up axis.
    - ``cells``: Cell connectivity with shape :math:`(N_c, D_m + 1)`. Each row
      lists point indices defining one simplex; triangles have three.

    **Attaching Field Data**

    - ``point_data``: Per-vertex quantities (texture coordinates under ``"uv"``)
    - ``cell_data``: Per-cell quantities (navigation area type under
      ``"area_type"``)
    - ``global_data``: Mesh-level quantities

    Parameters
    ----------
    points : torch.Tensor
        Vertex coordinates with shape :math:`(N_p, D_s)`. Must be floating-point.
    cells : torch.Tensor
        Cell connectivity with shape :math:`(N_c, D_m + 1)`. Must be integer dtype.
    point_data : TensorDict or dict[str, torch.Tensor], optional
        Per-vertex data. Dicts are automatically converted to TensorDict.
    cell_data : TensorDict or dict[str, torch.Tensor], optional
        Per-cell data. Dicts are automatically converted to TensorDict.
    global_data : TensorDict or dict[str, torch.Tensor], optional
        Mesh-level data. Dicts are automatically converted to TensorDict.

    Raises
    ------
    ValueError
        If ``points`` is not 2D, ``cells`` is not 2D, or manifold dimension
        exceeds spatial dimension.
    TypeError
        If ``points`` is not floating-point or ``cells`` is floating-point.

    Examples
    --------
    A flat 10 x 10 square made of two triangles, in the XZ plane:

    >>> import torch
    >>> from navborder.mesh import Mesh
    >>> points = torch.tensor([
    ...     [0.0, 0.0, 0.0],
    ...     [10.0, 0.0, 0.0],
    ...     [10.0, 0.0, 10.0],
    ...     [0.0, 0.0, 10.0],
    ... ])
    >>> cells = torch.tensor([[0, 1, 2], [0, 2, 3]])
    >>> mesh = Mesh(points=points, cells=cells)
    >>> mesh.n_points, mesh.n_cells, mesh.n_spatial_dims, mesh.n_manifold_dims
    (4, 2, 3, 2)
    """

    points: torch.Tensor  # shape: (n_points, n_spatial_dimensions)
    cells: torch.Tensor  # shape: (n_cells, n_manifold_dimensions + 1)
    point_data: TensorDict
    cell_data: TensorDict
    global_data: TensorDict

    def __init__(
        self,
        points: torch.Tensor,
        cells: torch.Tensor,
        point_data: TensorDict | dict[str, torch.Tensor] | None = None,
        cell_data: TensorDict | dict[str, torch.Tensor] | None = None,
        global_data: TensorDict | dict[str, torch.Tensor] | None = None,
    ) -> None:
        ### Assign tensorclass fields
        self.points = points
        self.cells = cells

        # For data fields, convert inputs to TensorDicts if needed
        if isinstance(point_data, TensorDict):
            point_data.batch_size = torch.Size([self.n_points])
        else:
            point_data = TensorDict(
                {} if point_data is None else dict(point_data),
                batch_size=torch.Size([self.n_points]),
                device=self.points.device,
            )
        self.point_data = point_data

        if isinstance(cell_data, TensorDict):
            cell_data.batch_size = torch.Size([self.n_cells])
        else:
            cell_data = TensorDict(
                {} if cell_data is None else dict(cell_data),
                batch_size=torch.Size([self.n_cells]),
                device=self.cells.device,
            )
        self.cell_data = cell_data

        if isinstance(global_data, TensorDict):
            global_data.batch_size = torch.Size([])
        else:
            global_data = TensorDict(
                {} if global_data is None else dict(global_data),
                batch_size=torch.Size([]),
                device=self.points.device,
            )
        self.global_data = global_data

        ### Validate shapes and dtypes
        if self.points.ndim != 2:
            raise ValueError(
                f"`points` must have shape (n_points, n_spatial_dimensions), but got {self.points.shape=}."
            )
        if self.cells.ndim != 2:
            raise ValueError(
                f"`cells` must have shape (n_cells, n_manifold_dimensions + 1), but got {self.cells.shape=}."
            )
        if self.n_manifold_dims > self.n_spatial_dims:
            raise ValueError(
                f"`n_manifold_dims` must be <= `n_spatial_dims`, but got {self.n_manifold_dims=} > {self.n_spatial_dims=}."
            )
        if not torch.is_floating_point(self.points):
            raise TypeError(
                f"`points` must have a floating-point dtype, but got {self.points.dtype=}."
            )
        if torch.is_floating_point(self.cells):
            raise TypeError(
                f"`cells` must have an int-like dtype, but got {self.cells.dtype=}."
            )
        if self.points.device != self.cells.device:
            raise ValueError(
                f"`points` and `cells` must be on the same device, "
                f"but got {self.points.device=} and {self.cells.device=}."
            )

    if TYPE_CHECKING:
        # Type stubs for methods dynamically added by @tensorclass.
        def to(self, *args: Any, **kwargs: Any) -> Self:
            """Move mesh and all attached data to another device or dtype."""
            ...

        def clone(self) -> Self:
            """Return a shallow clone of this Mesh."""
            ...

    @classmethod
    def from_triangulation(
        cls,
        vertices: torch.Tensor | Sequence[Sequence[float]],
        indices: torch.Tensor | Sequence[int],
        areas: torch.Tensor | Sequence[int] | None = None,
        device: torch.device | str | None = None,
    ) -> "Mesh":
        """Build a triangle mesh from flat navigation-solver buffers.

        Navigation solvers hand out a triangulation as a vertex array and a
        flat index array read three at a time, optionally with one area type
        per triangle.

        Parameters
        ----------
        vertices : torch.Tensor or sequence of 3-sequences
            Vertex positions, shape (n_vertices, 3).
        indices : torch.Tensor or sequence of int
            Flat triangle indices; the length must be a multiple of 3.
        areas : torch.Tensor or sequence of int, optional
            Area type of each triangle, stored as ``cell_data["area_type"]``.
        device : torch.device or str, optional
            Device for the created tensors.

        Returns
        -------
        Mesh
            Triangle mesh with ``n_manifold_dims == 2``.

        Raises
        ------
        ValueError
            If the index count is not a multiple of 3, or the area count does
            not match the triangle count.

        Examples
        --------
        >>> mesh = Mesh.from_triangulation(
        ...     [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]], [0, 2, 1]
        ... )
        >>> mesh.cells
        tensor([[0, 2, 1]])
        """
        points = torch.as_tensor(vertices, device=device)
        if not torch.is_floating_point(points):
            points = points.to(torch.get_default_dtype())
        flat_indices = torch.as_tensor(indices, dtype=torch.int64, device=points.device)
        if flat_indices.numel() % 3 != 0:
            raise ValueError(
                f"triangle indices must come in triples, but got {flat_indices.numel()=}."
            )
        cells = flat_indices.reshape(-1, 3)

        cell_data = None
        if areas is not None:
            area_type = torch.as_tensor(areas, dtype=torch.int64, device=points.device)
            if area_type.shape != (cells.shape[0],):
                raise ValueError(
                    f"expected one area per triangle, but got {area_type.shape=} for {cells.shape[0]} triangles."
                )
            cell_data = {"area_type": area_type}

        return cls(points=points, cells=cells, cell_data=cell_data)

    @property
    def n_points(self) -> int:
        return self.points.shape[0]

    @property
    def n_spatial_dims(self) -> int:
        return self.points.shape[-1]

    @property
    def n_cells(self) -> int:
        return self.cells.shape[0]

    @property
    def n_manifold_dims(self) -> int:
        return self.cells.shape[-1] - 1

    @property
    def is_triangle_mesh(self) -> bool:
        """True for triangles embedded in 3D space."""
        return self.n_manifold_dims == 2 and self.n_spatial_dims == 3

    @property
    def face_normals(self) -> torch.Tensor:
        """Unnormalized triangle normals ``cross(v3 - v1, v2 - v1)``.

        With this operand order a triangle wound from +X towards +Z, the
        winding navigation solvers emit for walkable faces, gets a normal
        along +Y. The magnitude is twice the triangle area; it is kept so
        callers can detect zero-area triangles.

        The result is cached in ``cell_data["_cache"]["face_normals"]``.

        Returns
        -------
        torch.Tensor
            Shape (n_cells, 3).

        Raises
        ------
        ValueError
            If the mesh is not a triangle mesh in 3D.
        """
        cached = get_cached(self.cell_data, "face_normals")
        if cached is None:
            if not self.is_triangle_mesh:
                raise ValueError(
                    f"face normals require triangles in 3D, but got {self.n_manifold_dims=} and {self.n_spatial_dims=}."
                )
            corners = self.points[self.cells]  # (n_cells, 3, 3)
            cached = torch.linalg.cross(
                corners[:, 2] - corners[:, 0],
                corners[:, 1] - corners[:, 0],
                dim=-1,
            )
            set_cached(self.cell_data, "face_normals", cached)
        return cached

    @property
    def cell_areas(self) -> torch.Tensor:
        """Triangle areas, shape (n_cells,)."""
        return torch.linalg.vector_norm(self.face_normals, dim=-1) / 2

    def slice_cells(
        self,
        indices: int | slice | torch.Tensor | Sequence[int | bool],
    ) -> "Mesh":
        """Returns a new Mesh with a subset of the cells.

        Points are kept as-is; use
        :func:`navborder.mesh.areas.remove_unused_points` to compact them.

        Parameters
        ----------
        indices : int or slice or torch.Tensor
            Indices or mask to select cells.

        Returns
        -------
        Mesh
            New Mesh with subset of cells.
        """
        if isinstance(indices, int):
            indices = torch.tensor([indices], device=self.cells.device)
        new_cell_data: TensorDict = self.cell_data.exclude(CACHE_KEY)[indices]  # type: ignore
        return Mesh(
            points=self.points,
            cells=self.cells[indices],
            point_data=self.point_data.exclude(CACHE_KEY),
            cell_data=new_cell_data,
            global_data=self.global_data,
        )

    def strip_caches(self) -> "Mesh":
        """Return a new mesh with all cached values removed."""
        return Mesh(
            points=self.points,
            cells=self.cells,
            point_data=self.point_data.exclude(CACHE_KEY),
            cell_data=self.cell_data.exclude(CACHE_KEY),
            global_data=self.global_data.exclude(CACHE_KEY),
        )


### Override the tensorclass __repr__ with custom formatting
# Note: Must be done after class definition because @tensorclass overrides __repr__
# even when defined inside the class body
def _mesh_repr(self) -> str:
    return format_mesh_repr(self, exclude_cache=True)


Mesh.__repr__ = _mesh_repr  # type: ignore
