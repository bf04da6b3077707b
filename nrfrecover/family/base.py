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

from typing import (ClassVar, Optional, Tuple)

from ..core.ap_address import ApAddress

class TargetFamily(object):
    """@brief Register map and protocol constants for one family of devices.

    The unlock and protection write sequences are written only in terms of these attributes, so a
    new family is supported by adding a subclass and registering it in
    @ref nrfrecover.family.FAMILIES "FAMILIES".
    """

    ## Family name used by the `family` option.
    NAME: ClassVar[str] = ""

    ## Target name passed to the probe when attaching for programming.
    TARGET_NAME: ClassVar[str] = ""

    ## Memory access port, whose CSW carries DbgStatus.
    MEM_AP: ClassVar[ApAddress]

    ## Vendor control access port providing erase-all and reset.
    CTRL_AP: ClassVar[ApAddress]

    # Register offsets within the access ports.
    MEM_AP_CSW: ClassVar[int] = 0x00
    CTRL_AP_RESET: ClassVar[int]
    CTRL_AP_ERASEALL: ClassVar[int]
    CTRL_AP_ERASEALLSTATUS: ClassVar[int]
    CTRL_AP_IDR: ClassVar[int] = 0xFC

    ## Expected CTRL-AP IDR. None skips the identity check; an IDR of 0 is always fatal.
    CTRL_AP_IDR_EXPECTED: ClassVar[Optional[int]] = None

    ## CSW.DbgStatus bit.
    CSW_DBGSTATUS_MASK: ClassVar[int] = 0x00000040

    ERASEALL_ERASE: ClassVar[int] = 0x1
    ERASEALLSTATUS_READY: ClassVar[int] = 0x0
    RESET_ASSERT: ClassVar[int] = 0x1
    RESET_RELEASE: ClassVar[int] = 0x0

    # Flash controller registers, as target memory addresses.
    NVMC_READY: ClassVar[int]
    NVMC_CONFIG: ClassVar[int]
    NVMC_READY_MASK: ClassVar[int] = 0x1
    NVMC_CONFIG_REN: ClassVar[int] = 0x0
    NVMC_CONFIG_WEN: ClassVar[int] = 0x1

    ## Value of an erased UICR word.
    UICR_ERASED: ClassVar[int] = 0xFFFFFFFF

    ## Protection words written after programming, as (address, value) pairs.
    PROTECTION_WORDS: ClassVar[Tuple[Tuple[int, int], ...]] = ()

    @classmethod
    def dbg_status(cls, csw: int) -> bool:
        """@brief Extract DbgStatus from a memory AP CSW value."""
        return (csw & cls.CSW_DBGSTATUS_MASK) != 0

    @classmethod
    def is_ready(cls, nvmc_ready: int) -> bool:
        """@brief Whether an NVMC.READY value reports the controller ready."""
        return (nvmc_ready & cls.NVMC_READY_MASK) != 0
