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

"""Tests for BorderConfig validation."""

import dataclasses
import math

import pytest

from navborder.mesh.border import BorderConfig
from navborder.mesh.utilities import DEFAULT_TOLERANCE


class TestBorderConfig:
    """Tests for BorderConfig defaults and validation."""

    def test_defaults(self):
        config = BorderConfig(border_width=2.0)
        assert config.texture_scale == 1.0
        assert config.force_up_normal is False
        assert config.remove_extending_edges is True
        assert config.tolerance == DEFAULT_TOLERANCE
        assert config.up_axis == (0.0, 1.0, 0.0)

    def test_up_axis_is_normalized_to_float_tuple(self):
        config = BorderConfig(border_width=1.0, up_axis=[0, 0, 1])
        assert config.up_axis == (0.0, 0.0, 1.0)
        assert all(isinstance(c, float) for c in config.up_axis)

    def test_frozen(self):
        config = BorderConfig(border_width=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.border_width = 3.0

    @pytest.mark.parametrize("width", [0.0, -1.0, math.inf, math.nan])
    def test_invalid_width(self, width):
        with pytest.raises(ValueError, match="border_width"):
            BorderConfig(border_width=width)

    @pytest.mark.parametrize("scale", [0.0, -2.0, math.inf])
    def test_invalid_texture_scale(self, scale):
        with pytest.raises(ValueError, match="texture_scale"):
            BorderConfig(border_width=1.0, texture_scale=scale)

    def test_invalid_tolerance(self):
        with pytest.raises(ValueError, match="tolerance"):
            BorderConfig(border_width=1.0, tolerance=0.0)

    @pytest.mark.parametrize("up_axis", [(0.0, 0.0, 0.0), (0.0, 1.0)])
    def test_invalid_up_axis(self, up_axis):
        with pytest.raises(ValueError, match="up_axis"):
            BorderConfig(border_width=1.0, up_axis=up_axis)
