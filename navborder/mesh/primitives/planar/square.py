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

"""Square walkable surface in the XZ plane.

Dimensional: 2D manifold in 3D space, one boundary loop.
"""

import torch

from navborder.mesh.mesh import Mesh
from navborder.mesh.primitives.planar._grid import grid_surface


def load(
    size: float = 1.0,
    subdivisions: int = 0,
    height: float = 0.0,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Create a triangulated square spanning [0, size] x [0, size] in X and Z.

    Parameters
    ----------
    size : float
        Side length.
    subdivisions : int
        Number of subdivision levels (0 = 2 triangles). Each level quadruples
        the number of triangles: 0 → 2, 1 → 8, 2 → 32, etc. Boundary sides
        are split into 2**subdivisions colinear edges.
    height : float
        Y coordinate of the surface.
    device : str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Mesh
        Mesh with n_manifold_dims=2, n_spatial_dims=3.
    """
    if subdivisions < 0:
        raise ValueError(f"subdivisions must be non-negative, got {subdivisions=}")

    n = 2**subdivisions
    return grid_surface(n, n, size / n, size / n, height=height, device=device)
