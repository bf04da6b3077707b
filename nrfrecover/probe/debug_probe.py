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

from typing import (List, NamedTuple, Optional, TYPE_CHECKING)

if TYPE_CHECKING:
    from ..core.ap_address import ApAddress
    from ..core.target_session import (Permissions, TargetSession)
    from .selector import DebugProbeSelector

class ProbeInfo(NamedTuple):
    """@brief Identity of a connected probe, as shown by `--list`."""
    vendor_id: Optional[int]
    product_id: Optional[int]
    unique_id: str
    description: str

class RawRegisterInterface(object):
    """@brief Raw access to access port registers, without any target selected.

    Obtained from @ref nrfrecover.probe.debug_probe.Probe.attach_unspecified
    "Probe.attach_unspecified()". Registers are addressed by an @ref
    nrfrecover.core.ap_address.ApAddress "ApAddress" plus a byte offset into the AP's register bank.
    """

    def read_ap_register(self, ap: "ApAddress", offset: int) -> int:
        """@brief Read a 32-bit AP register.
        @exception TransferError
        """
        raise NotImplementedError()

    def write_ap_register(self, ap: "ApAddress", offset: int, value: int) -> None:
        """@brief Write a 32-bit AP register.
        @exception TransferError
        """
        raise NotImplementedError()

    def close(self) -> "Probe":
        """@brief Release the interface and hand back the probe for a named-target attach."""
        raise NotImplementedError()

class Probe(object):
    """@brief An opened debug probe not yet bound to a target."""

    @property
    def unique_id(self) -> str:
        raise NotImplementedError()

    @property
    def description(self) -> str:
        raise NotImplementedError()

    def set_speed(self, frequency: int) -> None:
        """@brief Set the SWD clock in Hz used by later attaches."""
        raise NotImplementedError()

    def attach_unspecified(self) -> RawRegisterInterface:
        """@brief Connect to the default debug port without selecting a target.
        @exception ProbeError
        """
        raise NotImplementedError()

    def attach_named_target(self, name: str, permissions: "Permissions") -> "TargetSession":
        """@brief Fully attach to target type _name_.
        @exception ProbeError
        """
        raise NotImplementedError()

class ProbeTransport(object):
    """@brief Finds connected probes."""

    def discover(self, selector: "DebugProbeSelector") -> Probe:
        """@brief Return the first connected probe matching _selector_.
        @exception ProbeNotFoundError No probe matches.
        """
        raise NotImplementedError()

    def list_probes(self) -> List[ProbeInfo]:
        raise NotImplementedError()
