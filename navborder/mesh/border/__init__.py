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

"""Mitred border strip meshes along boundary loops."""

from navborder.mesh.border._config import BorderConfig
from navborder.mesh.border._generate import (
    generate_border_mesh,
    generate_navmesh_border,
)
from navborder.mesh.border._quads import (
    build_border_quads,
    edge_to_quad,
    loop_quad_tensor,
    mitre_quads,
)
