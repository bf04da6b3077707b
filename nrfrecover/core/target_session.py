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

from typing import NamedTuple

class Permissions(NamedTuple):
    """@brief What an attached session is allowed to do beyond normal debug access.

    @param allow_erase_all Whether the session may mass erase the device on its own, for instance
        to unlock it while attaching. Recovery performs its own erase, so this is off by default.
    """
    allow_erase_all: bool = False

class CoreHandle(object):
    """@brief 32-bit memory access and reset through one core of an attached target."""

    def read32(self, addr: int) -> int:
        """@brief Read a 32-bit word from target memory.
        @exception TransferError
        """
        raise NotImplementedError()

    def write32(self, addr: int, value: int) -> None:
        """@brief Write a 32-bit word to target memory.
        @exception TransferError
        """
        raise NotImplementedError()

    def reset(self) -> None:
        """@brief Reset the core and let it run."""
        raise NotImplementedError()

class TargetSession(object):
    """@brief Attached, addressable view of a named target.

    Created by @ref nrfrecover.probe.debug_probe.Probe.attach_named_target
    "Probe.attach_named_target()". Owned by one caller at a time; close() releases the probe.
    """

    @property
    def target_name(self) -> str:
        raise NotImplementedError()

    def core(self, index: int = 0) -> CoreHandle:
        """@brief Return a handle to core number _index_."""
        raise NotImplementedError()

    def close(self) -> None:
        raise NotImplementedError()

    def __enter__(self) -> "TargetSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
