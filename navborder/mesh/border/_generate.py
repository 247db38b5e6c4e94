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

"""Border strip meshes along navmesh boundary loops."""

import logging
from typing import Sequence

import torch

from navborder.mesh.border._config import BorderConfig
from navborder.mesh.border._quads import loop_quad_tensor
from navborder.mesh.boundaries._loops import get_outer_edge_loops
from navborder.mesh.geometry._primitives import EdgeLoop, edges_to_tensor
from navborder.mesh.geometry._uv import with_planar_uvs
from navborder.mesh.mesh import Mesh

logger = logging.getLogger(__name__)

# Two triangles per quad, as corner offsets (v1=0, v2=1, v3=2, v4=3).
_QUAD_TRIANGLES = torch.tensor([[2, 0, 3], [0, 1, 3]], dtype=torch.int64)


def generate_border_mesh(
    loops: Sequence[EdgeLoop],
    config: BorderConfig,
    dtype: torch.dtype | None = None,
    device: torch.device | str | None = None,
) -> Mesh:
    """Build a mitred border strip along each loop and concatenate them.

    Every non-degenerate loop edge produces one quad of four vertices and two
    triangles, ``(v3, v1, v4)`` and ``(v1, v2, v4)``. Quads of a loop are
    mitred against their predecessor, and the last quad against the first.
    Vertices are not shared between quads.

    Parameters
    ----------
    loops : sequence of EdgeLoop
        Closed boundary loops.
    config : BorderConfig
        Border width, UV settings, tolerance and up axis.
    dtype : torch.dtype, optional
        Floating-point dtype of the output points. Defaults to
        ``torch.get_default_dtype()``.
    device : torch.device or str, optional
        Device of the output mesh.

    Returns
    -------
    Mesh
        Triangle mesh with ``points`` of shape (4 * n_quads, 3), ``cells`` of
        shape (2 * n_quads, 3) and ``point_data["uv"]`` of shape
        (4 * n_quads, 2).
    """
    dtype = dtype or torch.get_default_dtype()

    ### Quads per loop, computed in float64 and cast once at the end
    quad_blocks = [
        loop_quad_tensor(
            edges_to_tensor(list(loop), dtype=torch.float64),
            width=config.border_width,
            up_axis=config.up_axis,
            tolerance=config.tolerance,
        )
        for loop in loops
    ]
    if quad_blocks:
        quads = torch.cat(quad_blocks, dim=0)
    else:
        quads = torch.empty((0, 4, 3), dtype=torch.float64)
    n_quads = quads.shape[0]

    points = quads.reshape(-1, 3).to(dtype=dtype, device=device)
    base = 4 * torch.arange(n_quads, dtype=torch.int64, device=points.device)
    cells = (
        base.view(-1, 1, 1) + _QUAD_TRIANGLES.to(points.device).unsqueeze(0)
    ).reshape(-1, 3)

    border = with_planar_uvs(
        Mesh(points=points, cells=cells),
        texture_scale=config.texture_scale,
        force_up_normal=config.force_up_normal,
        up_axis=config.up_axis,
    )
    logger.debug(
        "generated border mesh: %d loop(s), %d quad(s), %d triangle(s)",
        len(loops),
        n_quads,
        cells.shape[0],
    )
    return border


def generate_navmesh_border(mesh: Mesh, config: BorderConfig) -> Mesh:
    """Border strip along the outer boundary of a navmesh triangulation.

    Runs edge extraction, optional merging of extending edges, outer-edge
    filtering, loop building and border generation. The result has the dtype
    and device of ``mesh.points``.

    Parameters
    ----------
    mesh : Mesh
        Walkable surface as a triangle mesh in 3D.
    config : BorderConfig
        Border generation settings.

    Returns
    -------
    Mesh
        The border strip, see :func:`generate_border_mesh`.

    Examples
    --------
    >>> from navborder.mesh.primitives.planar import square
    >>> border = generate_navmesh_border(square.load(size=10.0), BorderConfig(2.0))
    >>> border.n_points, border.n_cells
    (16, 8)
    """
    loops = get_outer_edge_loops(
        mesh,
        remove_extending_edges=config.remove_extending_edges,
        tolerance=config.tolerance,
    )
    return generate_border_mesh(
        loops, config, dtype=mesh.points.dtype, device=mesh.points.device
    )
