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

import math
from dataclasses import dataclass

from navborder.mesh.utilities._tolerances import DEFAULT_TOLERANCE, check_tolerance


@dataclass(frozen=True)
class BorderConfig:
    """Parameters of border strip generation.

    Parameters
    ----------
    border_width : float
        Full width of the strip; each side of the boundary gets half of it.
    texture_scale : float
        World units per UV unit.
    force_up_normal : bool
        Project UVs along ``up_axis`` instead of each triangle's normal.
    remove_extending_edges : bool
        Merge colinear boundary edges before building loops, so subdivision
        points do not become strip corners.
    tolerance : float
        Distance below which two points coincide. Edges shorter than this are
        skipped.
    up_axis : tuple[float, float, float]
        World up direction; strip offsets are perpendicular to it.

    Raises
    ------
    ValueError
        If ``border_width`` or ``texture_scale`` is not a finite positive
        number, ``tolerance`` is not positive, or ``up_axis`` is not a
        non-zero 3-vector.

    Examples
    --------
    >>> BorderConfig(border_width=2.0).texture_scale
    1.0
    >>> BorderConfig(border_width=0.0)
    Traceback (most recent call last):
        ...
    ValueError: border_width must be finite and > 0, but got self.border_width=0.0
    """

    border_width: float
    texture_scale: float = 1.0
    force_up_normal: bool = False
    remove_extending_edges: bool = True
    tolerance: float = DEFAULT_TOLERANCE
    up_axis: tuple[float, float, float] = (0.0, 1.0, 0.0)

    def __post_init__(self) -> None:
        if not (math.isfinite(self.border_width) and self.border_width > 0):
            raise ValueError(
                f"border_width must be finite and > 0, but got {self.border_width=}"
            )
        if not (math.isfinite(self.texture_scale) and self.texture_scale > 0):
            raise ValueError(
                f"texture_scale must be finite and > 0, but got {self.texture_scale=}"
            )
        check_tolerance(self.tolerance)
        if len(self.up_axis) != 3 or not any(self.up_axis):
            raise ValueError(f"up_axis must be a non-zero 3-vector, but got {self.up_axis=}")
        # Frozen dataclass: normalize sequences through object.__setattr__
        object.__setattr__(self, "up_axis", tuple(float(c) for c in self.up_axis))
