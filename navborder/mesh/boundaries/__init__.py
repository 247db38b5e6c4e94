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

"""Outer boundary extraction for navmesh triangulations.

This module provides:
1. Edge extraction: the directed sides of every triangle
2. Extending-edge merging: colinear boundary edges joined into one
3. Outer-edge filtering: edges used by exactly one triangle
4. Loop building: boundary edges ordered into closed, directed loops
"""

from navborder.mesh.boundaries._edge_extraction import (
    extract_edge_index_pairs,
    extract_edge_tensor,
    extract_edges,
)
from navborder.mesh.boundaries._extending_edges import (
    ConnectionPoint,
    classify_connection,
    find_extending_edges,
    group_edges_by_direction,
    merge_extending_edges,
)
from navborder.mesh.boundaries._loops import (
    build_edge_loops,
    get_outer_edge_loops,
    trace_edge_chains,
)
from navborder.mesh.boundaries._outer_edges import (
    count_edge_occurrences,
    filter_outer_edges,
    get_outer_edges,
)
