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

"""Numerical tolerances for navmesh boundary computations.

Two kinds of tolerance are used throughout :mod:`navborder.mesh`:

- A *coincidence* tolerance, in world units, deciding when two points are the
  same vertex. Navigation meshes are authored at roughly metre scale, so
  :data:`DEFAULT_TOLERANCE` is ``1e-5``, the same threshold game engines use for
  approximate vector equality.
- A *division floor* returned by :func:`safe_eps`, derived from the dtype alone,
  used only to keep normalizations finite.

==========  =============  =============================
dtype       ``safe_eps``   ``1 / safe_eps ** 2``
==========  =============  =============================
float32     ~3.3e-10       ~9.2e+18  (well below 3.4e38)
float64     ~1.2e-77       ~6.7e+153 (well below 1.8e308)
==========  =============  =============================
"""

import torch

DEFAULT_TOLERANCE = 1e-5

# Face normals shorter than this are treated as zero-area triangles.
DEGENERATE_NORMAL_LENGTH = 1e-3


def safe_eps(dtype: torch.dtype) -> float:
    """Return a dtype-aware safe epsilon for preventing division by zero.

    Parameters
    ----------
    dtype : torch.dtype
        The floating-point dtype (e.g. ``torch.float32``,
        ``torch.float64``).

    Returns
    -------
    float
        A small positive floor value equal to
        ``torch.finfo(dtype).tiny ** 0.25``.
    """
    return torch.finfo(dtype).tiny ** 0.25


def check_tolerance(tolerance: float) -> float:
    """Validate a coincidence tolerance and return it as a float.

    Raises
    ------
    ValueError
        If ``tolerance`` is not a finite, strictly positive number.
    """
    tolerance = float(tolerance)
    if not tolerance > 0.0 or tolerance == float("inf"):
        raise ValueError(f"tolerance must be finite and > 0, but got {tolerance=}")
    return tolerance
