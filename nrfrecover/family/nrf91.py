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

from ..core.ap_address import ApAddress
from .base import TargetFamily

AHB_AP_NUM = 0x0
CTRL_AP_NUM = 0x4

CTRL_AP_RESET = 0x000
CTRL_AP_ERASEALL = 0x004
CTRL_AP_ERASEALLSTATUS = 0x008
CTRL_AP_IDR = 0x0FC

CTRL_IDR_EXPECTED = 0x12880000

NVMC_READY = 0x50039400
NVMC_CONFIG = 0x50039504

UICR_APPROTECT = 0x00FF8000
UICR_SECUREAPPROTECT = 0x00FF802C

## Written to the APPROTECT words so the access port stays open after reset.
APPROTECT_HW_UNPROTECTED = 0x50FA50FA

class NRF91Family(TargetFamily):
    """@brief nRF91 series (nRF9160, nRF9151, nRF9161, ...)."""

    NAME = "nrf91"
    TARGET_NAME = "nrf91"

    MEM_AP = ApAddress.with_default_dp(AHB_AP_NUM)
    CTRL_AP = ApAddress.with_default_dp(CTRL_AP_NUM)

    CTRL_AP_RESET = CTRL_AP_RESET
    CTRL_AP_ERASEALL = CTRL_AP_ERASEALL
    CTRL_AP_ERASEALLSTATUS = CTRL_AP_ERASEALLSTATUS
    CTRL_AP_IDR = CTRL_AP_IDR
    CTRL_AP_IDR_EXPECTED = CTRL_IDR_EXPECTED

    NVMC_READY = NVMC_READY
    NVMC_CONFIG = NVMC_CONFIG

    PROTECTION_WORDS = (
        (UICR_APPROTECT, APPROTECT_HW_UNPROTECTED),
        (UICR_SECUREAPPROTECT, APPROTECT_HW_UNPROTECTED),
        )
