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

"""Tolerances, tensor caches, point welding and repr formatting."""

from navborder.mesh.utilities._cache import get_cached, set_cached
from navborder.mesh.utilities._duplicate_detection import (
    compute_canonical_indices,
    find_duplicate_pairs,
    vectorized_connected_components,
)
from navborder.mesh.utilities._tolerances import (
    DEFAULT_TOLERANCE,
    check_tolerance,
    safe_eps,
)
from navborder.mesh.utilities.mesh_repr import format_mesh_repr
