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

"""Selection of navmesh triangles by area type.

Navigation solvers tag every triangle with an area type ``0 <= a < 32`` and
select areas with a bit mask: area ``a`` is included when bit ``a`` of the
mask is set. ``-1`` (all bits set) selects everything.
"""

import logging

import torch
from tensordict import TensorDict

from navborder.mesh.mesh import Mesh
from navborder.mesh.utilities._cache import CACHE_KEY

logger = logging.getLogger(__name__)

ALL_AREAS = -1
AREA_KEY = "area_type"


def remove_unused_points(
    points: torch.Tensor,  # shape: (n_points, n_spatial_dims)
    cells: torch.Tensor,  # shape: (n_cells, n_vertices_per_cell)
    point_data: TensorDict,
) -> tuple[torch.Tensor, torch.Tensor, TensorDict, torch.Tensor]:
    """Remove points that are not referenced by any cell.

    Kept points stay in ascending order of their original index.

    Parameters
    ----------
    points : torch.Tensor
        Point coordinates, shape (n_points, n_spatial_dims)
    cells : torch.Tensor
        Cell connectivity, shape (n_cells, n_vertices_per_cell)
    point_data : TensorDict
        Point data

    Returns
    -------
    used_points : torch.Tensor
        Points that are used by cells, shape (n_used_points, n_spatial_dims)
    updated_cells : torch.Tensor
        Cell connectivity re-indexed into ``used_points``
    used_point_data : TensorDict
        Point data for used points
    point_mapping : torch.Tensor
        Mapping from old to new point indices, shape (n_points,).
        Unused points map to -1.

    Examples
    --------
    >>> points = torch.tensor([[0., 0., 0.], [9., 9., 9.], [1., 0., 0.], [0., 0., 1.]])
    >>> cells = torch.tensor([[0, 3, 2]])  # point 1 is unused
    >>> used_points, updated_cells, _, mapping = remove_unused_points(
    ...     points, cells, TensorDict({}, batch_size=[4])
    ... )
    >>> updated_cells
    tensor([[0, 2, 1]])
    >>> mapping
    tensor([ 0, -1,  1,  2])
    """
    n_points = len(points)
    device = points.device

    ### Find which points are used by cells
    used_mask = torch.zeros(n_points, dtype=torch.bool, device=device)
    if len(cells) > 0:
        used_mask.scatter_(0, cells.flatten(), True)
    used_indices = torch.where(used_mask)[0]
    n_used = len(used_indices)

    ### Mapping from old to new indices
    point_mapping = torch.full((n_points,), -1, dtype=torch.int64, device=device)
    point_mapping[used_indices] = torch.arange(n_used, device=device, dtype=torch.int64)

    used_point_data = (
        point_data[used_indices]
        if len(point_data.keys()) > 0
        else TensorDict({}, batch_size=torch.Size([n_used]), device=device)
    )
    return points[used_indices], point_mapping[cells], used_point_data, point_mapping


def area_mask_selection(area_type: torch.Tensor, area_mask: int) -> torch.Tensor:
    """Boolean mask of the cells whose area bit is set in ``area_mask``.

    Examples
    --------
    >>> area_mask_selection(torch.tensor([0, 1, 2, 3]), area_mask=0b0101)
    tensor([ True, False,  True, False])
    """
    bits = torch.bitwise_left_shift(torch.ones_like(area_type), area_type)
    return torch.bitwise_and(bits, area_mask) != 0


def filter_by_area_mask(
    mesh: Mesh, area_mask: int = ALL_AREAS, area_key: str = AREA_KEY
) -> Mesh:
    """Keep the triangles whose area type is selected by ``area_mask``.

    Unreferenced points are removed afterwards and cells re-indexed, keeping
    points in their original relative order.

    Parameters
    ----------
    mesh : Mesh
        Navmesh triangulation with per-cell area types in ``cell_data``.
    area_mask : int
        Bit mask of areas to keep. :data:`ALL_AREAS` returns ``mesh`` as is.
    area_key : str
        Name of the area-type field in ``cell_data``.

    Returns
    -------
    Mesh
        The filtered mesh.

    Raises
    ------
    KeyError
        If ``mesh.cell_data`` has no ``area_key`` field.
    """
    if area_mask == ALL_AREAS:
        return mesh
    if area_key not in mesh.cell_data.keys():
        raise KeyError(
            f"cannot filter by area: {area_key=} is not in {list(mesh.cell_data.keys())=}"
        )

    selected = area_mask_selection(mesh.cell_data[area_key], area_mask)
    sub_mesh = mesh.slice_cells(selected)
    points, cells, point_data, _ = remove_unused_points(
        sub_mesh.points, sub_mesh.cells, sub_mesh.point_data
    )
    logger.debug(
        "area mask %#x kept %d/%d triangles and %d/%d points",
        area_mask & 0xFFFFFFFF,
        sub_mesh.n_cells,
        mesh.n_cells,
        len(points),
        mesh.n_points,
    )
    return Mesh(
        points=points,
        cells=cells,
        point_data=point_data,
        cell_data=sub_mesh.cell_data,
        global_data=mesh.global_data.exclude(CACHE_KEY),
    )
