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

"""Utility functions for string-formatting Mesh representations."""

from tensordict import TensorDict

from navborder.mesh.utilities._cache import CACHE_KEY


def format_mesh_repr(mesh, exclude_cache: bool = True) -> str:
    """Format a complete Mesh representation.

    Parameters
    ----------
    mesh : Mesh
        The Mesh instance to format.
    exclude_cache : bool
        If True, cached geometric quantities are not listed.

    Returns
    -------
    str
        Formatted string representation of the mesh.

    Examples
    --------
    >>> print(format_mesh_repr(mesh))  # doctest: +SKIP
    Mesh(manifold_dim=2, spatial_dim=3, n_points=4, n_cells=2)
        point_data : {}
        cell_data  : {area_type: ()}
        global_data: {}
    """
    ### First line: class name and key properties
    class_name = mesh.__class__.__name__
    parts = [
        f"manifold_dim={mesh.n_manifold_dims}",
        f"spatial_dim={mesh.n_spatial_dims}",
        f"n_points={mesh.n_points}",
        f"n_cells={mesh.n_cells}",
    ]
    device = mesh.device
    if device is not None:
        parts.append(f"device={device}")

    lines = [f"{class_name}({', '.join(parts)})"]

    ### Data fields, colons aligned
    data_fields = ["point_data", "cell_data", "global_data"]
    max_field_len = max(len(field) for field in data_fields)
    for field_name in data_fields:
        td = getattr(mesh, field_name)
        if exclude_cache:
            td = td.exclude(CACHE_KEY)
        padded_field = field_name.ljust(max_field_len)
        lines.append(f"    {padded_field}: {_format_tensordict(td)}")

    return "\n".join(lines)


def _format_tensordict(td: TensorDict) -> str:
    """Format a TensorDict as ``{key: trailing_shape, ...}`` on one line."""
    keys = sorted(td.keys())
    if len(keys) == 0:
        return "{}"

    batch_dims = len(td.batch_size)
    entries = []
    for key in keys:
        value = td[key]
        if isinstance(value, TensorDict):
            entries.append(f"{key}: {_format_tensordict(value)}")
        else:
            entries.append(f"{key}: {tuple(value.shape[batch_dims:])}")
    return "{" + ", ".join(entries) + "}"
