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

from ..utility.cmdline import int_base_0

## Raspberry Pi Debug Probe (CMSIS-DAP).
DEFAULT_VENDOR_ID = 0x2e8a
DEFAULT_PRODUCT_ID = 0x000c

class DebugProbeSelector(NamedTuple):
    """@brief Selects a probe by USB vendor and product ID, and optionally by serial number.

    The string form is `VID:PID[:SERIAL]`, with the IDs in hex.
    """
    vendor_id: int = DEFAULT_VENDOR_ID
    product_id: int = DEFAULT_PRODUCT_ID
    serial_number: Optional[str] = None

    @classmethod
    def from_string(cls, value: str) -> "DebugProbeSelector":
        """@brief Parse a `VID:PID[:SERIAL]` string.
        @exception ValueError The string is malformed.
        """
        fields = value.strip().split(':', 2)
        if len(fields) < 2:
            raise ValueError("invalid probe selector '%s' (expected VID:PID[:SERIAL])" % value)
        vendor_id = int(fields[0], 16)
        product_id = int(fields[1], 16)
        serial_number = fields[2] if (len(fields) > 2 and fields[2]) else None
        return cls(vendor_id, product_id, serial_number)

    @classmethod
    def from_args(cls, vendor_id: Optional[str], product_id: Optional[str],
            serial_number: Optional[str]) -> "DebugProbeSelector":
        """@brief Build a selector from command line strings, which may have base prefixes."""
        return cls(
            int_base_0(vendor_id) if vendor_id is not None else DEFAULT_VENDOR_ID,
            int_base_0(product_id) if product_id is not None else DEFAULT_PRODUCT_ID,
            serial_number or None)

    def matches(self, vendor_id: Optional[int], product_id: Optional[int], serial_number: str) -> bool:
        """@brief Whether a probe with the given identity is selected.

        The serial number compares case-insensitively.
        """
        if (vendor_id, product_id) != (self.vendor_id, self.product_id):
            return False
        if self.serial_number is None:
            return True
        return serial_number.lower() == self.serial_number.lower()

    def __str__(self) -> str:
        s = "%04x:%04x" % (self.vendor_id, self.product_id)
        if self.serial_number is not None:
            s += ":" + self.serial_number
        return s
