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

import logging
from typing import (Iterable, Optional, Tuple, Type)

from ..core import exceptions
from ..core.options_manager import OptionsManager
from ..core.target_session import CoreHandle
from ..family.base import TargetFamily
from ..utility.timeout import poll_until

LOG = logging.getLogger(__name__)

class ProtectionWriter(object):
    """@brief Programs single UICR words through the NVMC.

    UICR is flash: programming can only clear bits. A word is written only if it is erased or the
    new value clears bits without setting any. Otherwise ProtectionWriteError is raised before
    anything is written.

    The NVMC protocol is: enable writes, wait ready, write the word, wait ready, disable writes,
    wait ready. By default the ready waits have no bound, so an NVMC that never reports ready hangs
    the caller. The `nvmc.ready_timeout` option puts a bound on them.
    """

    def __init__(self, family: Type[TargetFamily], options: Optional[OptionsManager] = None) -> None:
        self._family = family
        self._options = options if (options is not None) else OptionsManager()

    @staticmethod
    def can_write(current: int, desired: int, erased: int = 0xFFFFFFFF) -> bool:
        """@brief Whether _desired_ can be programmed over _current_ without an erase."""
        return (current == erased) or ((current & desired) == desired)

    def write(self, core: CoreHandle, address: int, value: int) -> None:
        """@brief Program _value_ into the UICR word at _address_.

        @exception ProtectionWriteError The word would need bits set.
        @exception TimeoutError The NVMC did not report ready within `nvmc.ready_timeout`.
        @exception TransferError A memory access failed.
        """
        family = self._family
        current = core.read32(address)
        LOG.info("UICR @ 0x%08x: 0x%08x -> 0x%08x", address, current, value)
        if not self.can_write(current, value, family.UICR_ERASED):
            raise exceptions.ProtectionWriteError(address, current, value)

        core.write32(family.NVMC_CONFIG, family.NVMC_CONFIG_WEN)
        self._wait_ready(core)
        core.write32(address, value)
        self._wait_ready(core)
        core.write32(family.NVMC_CONFIG, family.NVMC_CONFIG_REN)
        self._wait_ready(core)

    def write_words(self, core: CoreHandle, words: Iterable[Tuple[int, int]]) -> None:
        """@brief Write a sequence of (address, value) pairs, stopping at the first failure."""
        for address, value in words:
            self.write(core, address, value)

    def _wait_ready(self, core: CoreHandle) -> None:
        ready_timeout = self._options.get('nvmc.ready_timeout')
        poll_interval = self._options.get('nvmc.poll_interval')
        if not poll_until(lambda: self._family.is_ready(core.read32(self._family.NVMC_READY)),
                ready_timeout, poll_interval):
            raise exceptions.TimeoutError("NVMC not ready after %.3fs" % ready_timeout)
