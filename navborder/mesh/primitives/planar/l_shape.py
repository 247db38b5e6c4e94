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

"""L-shaped walkable surface in the XZ plane.

Dimensional: 2D manifold in 3D space (non-convex), one boundary loop.
"""

import torch

from navborder.mesh.mesh import Mesh
from navborder.mesh.primitives.planar._grid import grid_surface


def load(
    size: float = 1.0,
    subdivisions: int = 1,
    height: float = 0.0,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Create an L-shaped non-convex surface.

    The L-shape consists of:
    - Bottom rectangle: [0, size] x [0, size/2] in X and Z
    - Top rectangle: [0, size/2] x [size/2, size] in X and Z

    Both parts use uniform grid spacing of size/(2*subdivisions). The outer
    boundary has six sides; the inner corner at (size/2, size/2) is reflex.

    Parameters
    ----------
    size : float
        Size of the L-shape (both overall width and depth).
    subdivisions : int
        Number of subdivisions per half-edge (so the full width has
        2*subdivisions cells).
    height : float
        Y coordinate of the surface.
    device : str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Mesh
        Mesh with n_manifold_dims=2, n_spatial_dims=3.
    """
    if subdivisions < 1:
        raise ValueError(f"subdivisions must be at least 1, got {subdivisions=}")

    n = 2 * subdivisions

    def keep_cell(i: int, j: int) -> bool:
        return i < subdivisions or j < subdivisions

    step = size / n
    return grid_surface(
        n, n, step, step, height=height, keep_cell=keep_cell, device=device
    )
