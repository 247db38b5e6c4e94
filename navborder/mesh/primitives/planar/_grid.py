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

"""Shared construction of walkable grid surfaces in the XZ plane."""

from typing import Callable

import torch
from tensordict import TensorDict

from navborder.mesh.areas._area_mask import remove_unused_points
from navborder.mesh.mesh import Mesh


def grid_surface(
    n_x: int,
    n_z: int,
    step_x: float,
    step_z: float,
    height: float = 0.0,
    keep_cell: Callable[[int, int], bool] | None = None,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Triangulate an ``n_x`` by ``n_z`` grid of cells lying at ``y = height``.

    Every kept grid cell ``(i, j)`` becomes two triangles wound from +X
    towards +Z, so face normals point along +Y. Grid points not used by any
    kept cell are dropped.

    Parameters
    ----------
    n_x, n_z : int
        Number of cells along X and Z.
    step_x, step_z : float
        Cell size along X and Z.
    height : float
        Y coordinate of the surface.
    keep_cell : callable, optional
        ``keep_cell(i, j)`` decides whether cell ``(i, j)`` is walkable.
        All cells are kept by default.
    device : str
        Compute device ('cpu' or 'cuda').
    """
    n_rows = n_z + 1  # points per grid column

    x = torch.arange(n_x + 1, dtype=torch.float32, device=device) * step_x
    z = torch.arange(n_z + 1, dtype=torch.float32, device=device) * step_z
    xx, zz = torch.meshgrid(x, z, indexing="ij")
    xx, zz = xx.flatten(), zz.flatten()
    points = torch.stack([xx, torch.full_like(xx, height), zz], dim=1)

    cells = []
    for i in range(n_x):
        for j in range(n_z):
            if keep_cell is not None and not keep_cell(i, j):
                continue
            idx = i * n_rows + j
            cells.append([idx, idx + n_rows, idx + 1])
            cells.append([idx + n_rows, idx + n_rows + 1, idx + 1])

    cells = torch.tensor(cells, dtype=torch.int64, device=device).reshape(-1, 3)
    points, cells, _, _ = remove_unused_points(
        points, cells, TensorDict({}, batch_size=[points.shape[0]], device=device)
    )
    return Mesh(points=points, cells=cells)
