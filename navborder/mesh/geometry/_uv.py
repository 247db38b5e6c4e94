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

"""Planar texture coordinates for triangle meshes.

Each triangle is projected onto its own plane: vertices are rotated into a
frame whose +Z axis is the face normal, and the rotated X/Y components become
the UV. Neighbouring triangles with different normals therefore get
independent projections; a vertex shared by several triangles keeps the UV
computed by the last triangle (in cell order) that references it.
"""

from typing import Sequence

import torch

from navborder.mesh.mesh import Mesh
from navborder.mesh.utilities._cache import CACHE_KEY
from navborder.mesh.utilities._tolerances import DEGENERATE_NORMAL_LENGTH, safe_eps

DEFAULT_UP_AXIS = (0.0, 1.0, 0.0)

# |cross(up, normal)| below this means the normal is parallel to the up axis.
_PARALLEL_TOLERANCE = 1e-6


def _normalize(vectors: torch.Tensor) -> torch.Tensor:
    norms = torch.linalg.vector_norm(vectors, dim=-1, keepdim=True)
    return vectors / norms.clamp_min(safe_eps(vectors.dtype))


def look_rotation_bases(
    normals: torch.Tensor, up_axis: Sequence[float] = DEFAULT_UP_AXIS
) -> torch.Tensor:
    """Orthonormal frames whose +Z axis points along each normal.

    The frame's +Y axis is as close to ``up_axis`` as possible. When a normal
    is parallel to ``up_axis`` no such hint exists, and the frame of the
    smallest rotation taking +Z onto the normal is used instead: +X stays on
    the world X axis (or the world Y axis, if the normal lies along X).

    Parameters
    ----------
    normals : torch.Tensor
        Shape (n, 3). Need not be normalized, but must be non-zero.
    up_axis : sequence of float
        Up hint, length 3.

    Returns
    -------
    torch.Tensor
        Shape (n, 3, 3). Row ``k`` is the frame's k-th axis in world
        coordinates, so ``bases @ v`` expresses ``v`` in the frame.
    """
    dtype, device = normals.dtype, normals.device
    z_axis = _normalize(normals)
    up = torch.as_tensor(up_axis, dtype=dtype, device=device).expand_as(z_axis)

    x_axis = torch.linalg.cross(up, z_axis, dim=-1)
    x_norm = torch.linalg.vector_norm(x_axis, dim=-1, keepdim=True)
    parallel = x_norm < _PARALLEL_TOLERANCE

    ### Fallback reference axis for normals parallel to the up hint
    world_x = torch.tensor([1.0, 0.0, 0.0], dtype=dtype, device=device)
    world_y = torch.tensor([0.0, 1.0, 0.0], dtype=dtype, device=device)
    along_x = (z_axis @ world_x).abs().unsqueeze(-1) > 0.9
    reference = torch.where(along_x, world_y, world_x)
    projected = reference - (reference * z_axis).sum(dim=-1, keepdim=True) * z_axis

    x_axis = _normalize(torch.where(parallel, projected, x_axis))
    y_axis = torch.linalg.cross(z_axis, x_axis, dim=-1)
    return torch.stack([x_axis, y_axis, z_axis], dim=-2)


def compute_planar_uvs(
    points: torch.Tensor,
    cells: torch.Tensor,
    texture_scale: float = 1.0,
    force_up_normal: bool = False,
    up_axis: Sequence[float] = DEFAULT_UP_AXIS,
    normals: torch.Tensor | None = None,
) -> torch.Tensor:
    """Compute per-vertex planar UVs for a triangle mesh.

    For each triangle the projection normal is ``cross(v3 - v1, v2 - v1)``
    (or the matching row of ``normals`` when given), or ``up_axis`` when
    ``force_up_normal`` is set. Vertices are rotated by
    the inverse of the look rotation towards that normal, and the first two
    components of the result, divided by ``texture_scale``, are the UV.
    Triangles whose normal is shorter than
    :data:`~navborder.mesh.utilities._tolerances.DEGENERATE_NORMAL_LENGTH`
    use the identity rotation.

    Parameters
    ----------
    points : torch.Tensor
        Vertex positions, shape (n_points, 3).
    cells : torch.Tensor
        Triangles, shape (n_cells, 3).
    texture_scale : float
        World units per UV unit. Must be positive.
    force_up_normal : bool
        Project every triangle along ``up_axis`` instead of its face normal.
    up_axis : sequence of float
        World up direction, length 3.
    normals : torch.Tensor, optional
        Precomputed unnormalized face normals, shape (n_cells, 3), such as
        :attr:`Mesh.face_normals`. Their length decides degeneracy, so they
        must not be normalized.

    Returns
    -------
    torch.Tensor
        Shape (n_points, 2). Vertices referenced by no triangle get (0, 0).

    Raises
    ------
    ValueError
        If ``texture_scale`` is not positive, the inputs are not triangles
        in 3D, or ``normals`` does not have one row per triangle.

    Examples
    --------
    A triangle in the XY plane with a +Z normal projects to its own X/Y:

    >>> points = torch.tensor([[0.0, 0.0, 0.0], [0.0, 2.0, 0.0], [2.0, 0.0, 0.0]])
    >>> compute_planar_uvs(points, torch.tensor([[0, 1, 2]]), texture_scale=2.0)
    tensor([[0., 0.],
            [0., 1.],
            [1., 0.]])
    """
    if not texture_scale > 0:
        raise ValueError(f"texture_scale must be > 0, but got {texture_scale=}")
    if points.ndim != 2 or points.shape[-1] != 3:
        raise ValueError(f"planar UVs require 3D points, but got {points.shape=}")
    if cells.ndim != 2 or cells.shape[-1] != 3:
        raise ValueError(f"planar UVs require triangles, but got {cells.shape=}")
    if normals is not None and normals.shape != (cells.shape[0], 3):
        raise ValueError(
            f"expected one normal per triangle, but got {normals.shape=} for {cells.shape[0]} triangles."
        )

    n_points = points.shape[0]
    uvs = torch.zeros((n_points, 2), dtype=points.dtype, device=points.device)
    if cells.shape[0] == 0:
        return uvs

    corners = points[cells]  # (n_cells, 3, 3)

    ### Projection normal per triangle
    if force_up_normal:
        normals = torch.as_tensor(
            up_axis, dtype=points.dtype, device=points.device
        ).expand(cells.shape[0], 3)
    elif normals is not None:
        normals = normals.to(points.dtype)
    else:
        normals = torch.linalg.cross(
            corners[:, 2] - corners[:, 0], corners[:, 1] - corners[:, 0], dim=-1
        )
    degenerate = torch.linalg.vector_norm(normals, dim=-1) <= DEGENERATE_NORMAL_LENGTH

    ### Inverse look rotation; identity for degenerate triangles
    bases = look_rotation_bases(
        torch.where(degenerate.unsqueeze(-1), torch.ones_like(normals), normals),
        up_axis=up_axis,
    )
    identity = torch.eye(3, dtype=points.dtype, device=points.device)
    bases = torch.where(degenerate.view(-1, 1, 1), identity, bases)

    rotated = torch.einsum("cij,ckj->cki", bases, corners)  # (n_cells, 3, 3)
    corner_uvs = rotated[..., :2].reshape(-1, 2) / texture_scale

    ### The last (triangle, corner) slot referencing a vertex wins
    flat_vertices = cells.reshape(-1).long()
    slot = torch.arange(flat_vertices.shape[0], device=points.device)
    last_slot = torch.full((n_points,), -1, dtype=torch.long, device=points.device)
    last_slot.scatter_reduce_(0, flat_vertices, slot, reduce="amax")

    referenced = last_slot >= 0
    uvs[referenced] = corner_uvs[last_slot[referenced]]
    return uvs


def with_planar_uvs(
    mesh: Mesh,
    texture_scale: float = 1.0,
    force_up_normal: bool = False,
    up_axis: Sequence[float] = DEFAULT_UP_AXIS,
) -> Mesh:
    """Return a copy of a triangle mesh with ``point_data["uv"]`` filled in.

    Face normals come from the mesh's cached :attr:`Mesh.face_normals`. See
    :func:`compute_planar_uvs` for the projection.
    """
    if not mesh.is_triangle_mesh:
        raise ValueError(
            f"planar UVs require triangles in 3D, but got {mesh.n_manifold_dims=} and {mesh.n_spatial_dims=}."
        )
    point_data = mesh.point_data.exclude(CACHE_KEY).clone()
    point_data["uv"] = compute_planar_uvs(
        mesh.points,
        mesh.cells,
        texture_scale=texture_scale,
        force_up_normal=force_up_normal,
        up_axis=up_axis,
        normals=None if force_up_normal else mesh.face_normals,
    )
    return Mesh(
        points=mesh.points,
        cells=mesh.cells,
        point_data=point_data,
        cell_data=mesh.cell_data.exclude(CACHE_KEY),
        global_data=mesh.global_data,
    )
