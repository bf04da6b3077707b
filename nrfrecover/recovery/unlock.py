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
from time import (sleep, time)
from typing import (Optional, Type)

from ..core import exceptions
from ..core.options_manager import OptionsManager
from ..family.base import TargetFamily
from ..probe.debug_probe import (Probe, RawRegisterInterface)
from ..utility.timeout import poll_until

LOG = logging.getLogger(__name__)

class DeviceUnlocker(object):
    """@brief Brings a debug-locked device back to a debuggable state through its CTRL-AP.

    The sequence is:
    1. Read the memory AP CSW. If DbgStatus is set and the unlock is not forced, stop here.
    2. Check that the CTRL-AP identifies itself. An IDR of 0 means the AP index is wrong.
    3. Write ERASEALL and poll ERASEALLSTATUS until it clears or `unlock.erase_timeout` passes. An
       expired erase wait is only logged.
    4. Pulse CTRL-AP RESET.
    5. Poll CSW until DbgStatus is set. If it stays clear for `unlock.verify_timeout` seconds the
       unlock has failed.

    The erase wipes all flash and RAM, including UICR.

    All timing values come from the options passed to the constructor.
    """

    def __init__(self, family: Type[TargetFamily], options: Optional[OptionsManager] = None) -> None:
        self._family = family
        self._options = options if (options is not None) else OptionsManager()
        self._iface: Optional[RawRegisterInterface] = None
        self._did_erase = False

    @property
    def did_erase(self) -> bool:
        """@brief Whether the last unlock() performed the erase and reset sequence."""
        return self._did_erase

    def unlock(self, probe: Probe, force: bool = False) -> Probe:
        """@brief Unlock the device behind _probe_ if it is locked, or always if _force_ is set.

        @return The probe, released from raw register access and ready for a named-target attach.
        @exception ConfigurationError The CTRL-AP does not identify itself.
        @exception UnlockError DbgStatus never became set after the reset.
        @exception ProbeError Raw register access failed.
        """
        self._did_erase = False
        self._iface = probe.attach_unspecified()
        try:
            if self.is_debug_enabled() and not force:
                LOG.info("Debug access already enabled; not erasing")
            else:
                if force:
                    LOG.info("Forcing unlock sequence")
                self.check_ctrl_ap_idr()
                self.erase_all()
                self.reset()
                self.wait_debug_enabled()
                self._did_erase = True
        except BaseException:
            self._release_after_error()
            raise

        iface, self._iface = self._iface, None
        return iface.close()

    def _release_after_error(self) -> None:
        assert self._iface is not None
        iface, self._iface = self._iface, None
        try:
            iface.close()
        except exceptions.Error as err:
            LOG.debug("Error releasing raw register interface: %s", err)

    def _read_mem_ap(self, offset: int) -> int:
        assert self._iface is not None
        return self._iface.read_ap_register(self._family.MEM_AP, offset)

    def _read_ctrl_ap(self, offset: int) -> int:
        assert self._iface is not None
        return self._iface.read_ap_register(self._family.CTRL_AP, offset)

    def _write_ctrl_ap(self, offset: int, value: int) -> None:
        assert self._iface is not None
        self._iface.write_ap_register(self._family.CTRL_AP, offset, value)

    def is_debug_enabled(self) -> bool:
        """@brief Read the memory AP CSW and return its DbgStatus bit."""
        csw = self._read_mem_ap(self._family.MEM_AP_CSW)
        enabled = self._family.dbg_status(csw)
        LOG.info("CSW: 0x%08x, DbgStatus: %d", csw, int(enabled))
        return enabled

    def check_ctrl_ap_idr(self) -> int:
        """@brief Read the CTRL-AP IDR.

        A failed read is handled the same as a zero IDR. A non-zero IDR other than the family's
        expected value only produces a warning.

        @exception ConfigurationError The IDR is 0 or cannot be read.
        """
        try:
            idr = self._read_ctrl_ap(self._family.CTRL_AP_IDR)
        except exceptions.TransferError as err:
            raise exceptions.ConfigurationError("unable to read CTRL-AP IDR at %s, check AP index"
                    % (self._family.CTRL_AP,)) from err
        LOG.info("CTRL-AP IDR: 0x%08x", idr)
        if idr == 0:
            raise exceptions.ConfigurationError("invalid CTRL-AP IDR at %s, check AP index"
                    % (self._family.CTRL_AP,))
        expected = self._family.CTRL_AP_IDR_EXPECTED
        if (expected is not None) and (idr != expected):
            LOG.warning("Unexpected CTRL-AP IDR 0x%08x (expected 0x%08x)", idr, expected)
        return idr

    def erase_all(self) -> bool:
        """@brief Start ERASEALL and wait for ERASEALLSTATUS to return to ready.

        @retval True The erase completed.
        @retval False The wait expired. Recovery continues regardless.
        """
        erase_timeout = self._options.get('unlock.erase_timeout')
        poll_interval = self._options.get('unlock.erase_poll_interval')

        self._write_ctrl_ap(self._family.CTRL_AP_ERASEALL, self._family.ERASEALL_ERASE)
        LOG.info("Started ERASEALL")

        start = time()
        completed = poll_until(self._is_erase_done, erase_timeout, poll_interval)
        if completed:
            LOG.info("Erase completed")
        else:
            LOG.warning("Erase status did not clear within %.1fs; continuing", erase_timeout)
        LOG.info("Time used to erase: %.3fs", time() - start)
        return completed

    def _is_erase_done(self) -> bool:
        status = self._read_ctrl_ap(self._family.CTRL_AP_ERASEALLSTATUS)
        LOG.debug("ERASEALLSTATUS: 0x%08x", status)
        return status == self._family.ERASEALLSTATUS_READY

    def reset(self) -> None:
        """@brief Pulse the CTRL-AP soft reset, with settle delays before and after."""
        sleep(self._options.get('unlock.pre_reset_delay'))
        self._write_ctrl_ap(self._family.CTRL_AP_RESET, self._family.RESET_ASSERT)
        self._write_ctrl_ap(self._family.CTRL_AP_RESET, self._family.RESET_RELEASE)
        sleep(self._options.get('unlock.post_reset_delay'))
        LOG.info("Issued CTRL-AP soft reset")

    def wait_debug_enabled(self) -> None:
        """@brief Poll CSW until DbgStatus is set.
        @exception UnlockError DbgStatus stayed clear for longer than `unlock.verify_timeout`.
        """
        verify_timeout = self._options.get('unlock.verify_timeout')
        poll_interval = self._options.get('unlock.verify_poll_interval')

        start = time()
        if not poll_until(self.is_debug_enabled, verify_timeout, poll_interval):
            raise exceptions.UnlockError("debug status = 0 for %.1fs after reset, access port "
                    "not enabled" % verify_timeout)
        LOG.info("Debug access enabled after %.3fs", time() - start)
