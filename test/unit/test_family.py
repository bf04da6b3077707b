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

import pytest

from nrfrecover.core import exceptions
from nrfrecover.core.ap_address import (ApAddress, DEFAULT_DP)
from nrfrecover.family import (FAMILIES, get_family)
from nrfrecover.family.nrf91 import (NRF91Family, UICR_APPROTECT, UICR_SECUREAPPROTECT)

class TestFamily(object):
    def test_registry(self):
        assert FAMILIES == {'nrf91': NRF91Family}

    @pytest.mark.parametrize("name", ["nrf91", "NRF91", " nRF91 "])
    def test_get_family(self, name):
        assert get_family(name) is NRF91Family

    def test_unknown(self):
        with pytest.raises(exceptions.ConfigurationError) as excinfo:
            get_family("nrf52")
        assert "nrf52" in str(excinfo.value)
        assert "nrf91" in str(excinfo.value)

class TestNRF91Family(object):
    def test_access_ports(self):
        assert NRF91Family.MEM_AP == ApAddress(0, DEFAULT_DP)
        assert NRF91Family.CTRL_AP == ApAddress(4, DEFAULT_DP)
        assert NRF91Family.CTRL_AP_IDR_EXPECTED == 0x12880000

    def test_registers(self):
        assert (NRF91Family.CTRL_AP_RESET, NRF91Family.CTRL_AP_ERASEALL,
                NRF91Family.CTRL_AP_ERASEALLSTATUS, NRF91Family.CTRL_AP_IDR) == (0x0, 0x4, 0x8, 0xFC)
        assert NRF91Family.NVMC_READY == 0x50039400
        assert NRF91Family.NVMC_CONFIG == 0x50039504

    def test_protection_words(self):
        assert NRF91Family.PROTECTION_WORDS == (
            (UICR_APPROTECT, 0x50FA50FA),
            (UICR_SECUREAPPROTECT, 0x50FA50FA),
            )
        assert (UICR_APPROTECT, UICR_SECUREAPPROTECT) == (0x00FF8000, 0x00FF802C)

    @pytest.mark.parametrize(("csw", "enabled"), [
        (0x00000000, False),
        (0x00000040, True),
        (0x23000052, True),
        (0xFFFFFFBF, False),
        ])
    def test_dbg_status(self, csw, enabled):
        assert NRF91Family.dbg_status(csw) is enabled

    @pytest.mark.parametrize(("value", "ready"), [
        (0, False),
        (1, True),
        (0xFFFFFFFE, False),
        (3, True),
        ])
    def test_is_ready(self, value, ready):
        assert NRF91Family.is_ready(value) is ready
