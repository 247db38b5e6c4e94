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

"""Geometric value types, line intersection and planar UV projection."""

from navborder.mesh.geometry._intersection import (
    approximate_line_intersection,
    approximate_line_intersections,
)
from navborder.mesh.geometry._primitives import (
    Edge,
    EdgeLoop,
    Point,
    Quad,
    edges_from_tensor,
    edges_to_tensor,
)
from navborder.mesh.geometry._uv import (
    compute_planar_uvs,
    look_rotation_bases,
    with_planar_uvs,
)
