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

"""Long rectangular walkable strip split into segments along its length.

Dimensional: 2D manifold in 3D space, one boundary loop whose long sides are
chains of colinear edges.
"""

import torch

from navborder.mesh.mesh import Mesh
from navborder.mesh.primitives.planar._grid import grid_surface


def load(
    length: float = 10.0,
    width: float = 1.0,
    segments: int = 4,
    height: float = 0.0,
    device: torch.device | str = "cpu",
) -> Mesh:
    """Create a [0, length] x [0, width] strip of ``segments`` cells along X.

    Parameters
    ----------
    length : float
        Extent along X.
    width : float
        Extent along Z.
    segments : int
        Number of cells along X; each long side consists of this many edges.
    height : float
        Y coordinate of the surface.
    device : str
        Compute device ('cpu' or 'cuda').

    Returns
    -------
    Mesh
        Mesh with n_manifold_dims=2, n_spatial_dims=3 and 2 * segments cells.
    """
    if segments < 1:
        raise ValueError(f"segments must be at least 1, got {segments=}")

    return grid_surface(
        segments, 1, length / segments, width, height=height, device=device
    )
