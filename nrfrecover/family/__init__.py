# nrfrecover
# Copyright (c) 2026 nrfrecover contributors
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

from typing import (Dict, Type)

from ..core import exceptions
from .base import TargetFamily
from .nrf91 import NRF91Family

## @brief Supported families indexed by name.
FAMILIES: Dict[str, Type[TargetFamily]] = {
    NRF91Family.NAME: NRF91Family,
    }

def get_family(name: str) -> Type[TargetFamily]:
    """@brief Look up a family by case-insensitive name.
    @exception ConfigurationError No such family.
    """
    try:
        return FAMILIES[name.strip().lower()]
    except KeyError:
        raise exceptions.ConfigurationError("unknown target family '%s' (supported: %s)"
                % (name, ", ".join(sorted(FAMILIES))))
