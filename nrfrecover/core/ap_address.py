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

from typing import (NamedTuple, Optional)

class DpAddress(NamedTuple):
    """@brief Selects a debug port.

    A _targetsel_ of None is the default DP, the only one on a point-to-point SWD link. A value
    selects a DP on a multi-drop SWD bus by its TARGETSEL word.
    """
    targetsel: Optional[int] = None

    @property
    def is_default(self) -> bool:
        return self.targetsel is None

    def __str__(self) -> str:
        return "default" if self.is_default else "0x%08x" % self.targetsel

## @brief The default debug port.
DEFAULT_DP = DpAddress()

class _ApAddressFields(NamedTuple):
    ap: int
    dp: DpAddress

class ApAddress(_ApAddressFields):
    """@brief Fully qualified address of an ADIv5 (APv1) access port.

    Combines the debug port and the 8-bit APSEL index. Register offsets within the AP are added by
    the raw register interface.

    @exception ValueError The AP index does not fit in APSEL.
    """
    __slots__ = ()

    def __new__(cls, ap: int, dp: DpAddress = DEFAULT_DP) -> "ApAddress":
        if not (0 <= ap <= 0xff):
            raise ValueError("AP index %d out of range" % ap)
        return super().__new__(cls, ap, dp)

    @classmethod
    def with_default_dp(cls, ap: int) -> "ApAddress":
        """@brief Construct an address for AP number _ap_ on the default debug port."""
        return cls(ap, DEFAULT_DP)

    def __str__(self) -> str:
        return "AP#%d@DP(%s)" % (self.ap, self.dp)
