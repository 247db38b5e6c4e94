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

"""Tests for dtype-aware numerical tolerances."""

import math

import pytest
import torch

from navborder.mesh.utilities._tolerances import (
    DEFAULT_TOLERANCE,
    check_tolerance,
    safe_eps,
)


@pytest.mark.parametrize("dtype", [torch.float32, torch.float64])
class TestSafeEps:
    """Verify safe_eps returns principled, dtype-aware floor values."""

    def test_matches_formula(self, dtype: torch.dtype) -> None:
        """safe_eps should equal tiny ** 0.25 for the given dtype."""
        expected = torch.finfo(dtype).tiny ** 0.25
        assert safe_eps(dtype) == expected

    def test_reciprocal_squared_does_not_overflow(self, dtype: torch.dtype) -> None:
        """1 / safe_eps**2 must be representable (not inf)."""
        assert math.isfinite(1.0 / safe_eps(dtype) ** 2)

    def test_far_below_coincidence_tolerance(self, dtype: torch.dtype) -> None:
        """Division floors must never be mistaken for geometric tolerances."""
        assert safe_eps(dtype) < DEFAULT_TOLERANCE * 1e-3


class TestCheckTolerance:
    """Validation of user-supplied coincidence tolerances."""

    @pytest.mark.parametrize("tolerance", [1e-9, 1e-5, 0.5, 3])
    def test_accepts_positive(self, tolerance):
        assert check_tolerance(tolerance) == float(tolerance)

    @pytest.mark.parametrize("tolerance", [0.0, -1e-5, float("inf"), float("nan")])
    def test_rejects_invalid(self, tolerance):
        with pytest.raises(ValueError, match="tolerance"):
            check_tolerance(tolerance)
