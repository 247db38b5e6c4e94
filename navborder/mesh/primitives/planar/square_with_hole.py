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

"""Square walkable surface with a square hole in the middle.

Dimensional: 2D manifold in 3D space, two boundary loops (outer and hole).
"""

import torch

from navborder.mesh.mesh import Mesh
from navborder.mesh.primitives.planar._grid import grid_surface


def load(
    size: float = 3.0,
    cells_per_side: int = 3,
    hole_cells: int = 1,
    height: float = 0.0,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Create a square of side ``size`` with a centred square hole.

    The square is a ``cells_per_side`` by ``cells_per_side`` grid in the XZ
    plane; the central ``hole_cells`` by ``hole_cells`` block of grid cells is
    left out.

    Parameters
    ----------
    size : float
        Outer side length.
    cells_per_side : int
        Grid cells along each side.
    hole_cells : int
        Grid cells along each side of the hole. At least one ring of cells
        must remain around it, and the hole must be centred, so
        ``cells_per_side - hole_cells`` must be even and at least 2.
    height : float
        Y coordinate of the surface.
    device : str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Mesh
        Mesh with n_manifold_dims=2, n_spatial_dims=3.
    """
    margin, remainder = divmod(cells_per_side - hole_cells, 2)
    if hole_cells < 1 or margin < 1 or remainder != 0:
        raise ValueError(
            f"the hole must be centred and strictly inside the square, got "
            f"{cells_per_side=} and {hole_cells=}"
        )

    hole = range(margin, margin + hole_cells)

    def keep_cell(i: int, j: int) -> bool:
        return not (i in hole and j in hole)

    step = size / cells_per_side
    return grid_surface(
        cells_per_side,
        cells_per_side,
        step,
        step,
        height=height,
        keep_cell=keep_cell,
        device=device,
    )
