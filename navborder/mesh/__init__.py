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

"""Triangle meshes for navigation surfaces and their border strips.

Pipeline from a walkable triangulation to a border strip:

1. :func:`~navborder.mesh.boundaries.extract_edges`: three directed edges per
   triangle
2. :func:`~navborder.mesh.boundaries.filter_outer_edges`: edges used by
   exactly one triangle
3. :func:`~navborder.mesh.boundaries.merge_extending_edges`: colinear boundary
   edges joined into one
4. :func:`~navborder.mesh.boundaries.build_edge_loops`: edges ordered into
   closed loops
5. :func:`~navborder.mesh.border.generate_border_mesh`: mitred quad strip with
   planar UVs

:func:`~navborder.mesh.border.generate_navmesh_border` runs all of them.
"""

from navborder.mesh.mesh import Mesh  # noqa: I001

from navborder.mesh import areas, border, boundaries, geometry, primitives  # noqa: F401
from navborder.mesh.border import BorderConfig, generate_navmesh_border  # noqa: F401
