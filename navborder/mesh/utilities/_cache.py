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

"""Cached geometric quantities stored inside a mesh's TensorDicts.

Face normals feed the planar UV projection, which also reads their length to
detect degenerate triangles, and ``Mesh.cell_areas`` is derived from them.
They are kept under the ``"_cache"`` key of ``cell_data``. Anything under
that key is dropped whenever a new mesh is derived from an existing one.
"""

import torch
from tensordict import TensorDict

CACHE_KEY = "_cache"


def get_cached(data: TensorDict, key: str) -> torch.Tensor | None:
    """Get a cached value from a TensorDict, or ``None`` if absent.

    Examples
    --------
    >>> cached_normals = get_cached(mesh.cell_data, "face_normals")  # doctest: +SKIP
    """
    return data.get((CACHE_KEY, key), None)


def set_cached(data: TensorDict, key: str, value: torch.Tensor) -> None:
    """Store ``value`` under ``("_cache", key)``, creating the sub-TensorDict."""
    if CACHE_KEY not in data:
        data[CACHE_KEY] = TensorDict({}, batch_size=data.batch_size, device=data.device)
    data[(CACHE_KEY, key)] = value
