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
from contextlib import contextmanager
from typing import (Any, Dict, Iterator, List, Optional, Tuple, Type)

from pyocd.core import exceptions as pyocd_exceptions
from pyocd.core.session import Session
from pyocd.coresight.ap import APv1Address
from pyocd.flash.file_programmer import FileProgrammer
from pyocd.probe.aggregator import DebugProbeAggregator
from pyocd.probe.debug_probe import DebugProbe

from ..core import exceptions
from ..core.ap_address import ApAddress
from ..core.target_session import (CoreHandle, Permissions, TargetSession)
from ..flash.programmer import ImageProgrammer
from .debug_probe import (Probe, ProbeInfo, ProbeTransport, RawRegisterInterface)
from .selector import DebugProbeSelector

LOG = logging.getLogger(__name__)

## Target type used for raw register access before the real target is known.
UNSPECIFIED_TARGET = "cortex_m"

@contextmanager
def translate_errors(error_class: Type[exceptions.Error], what: str) -> Iterator[None]:
    """@brief Reraise pyOCD errors raised in the body as _error_class_, chained."""
    try:
        yield
    except pyocd_exceptions.Error as err:
        raise error_class("%s: %s" % (what, err)) from err

def probe_usb_ids(probe: DebugProbe) -> Tuple[Optional[int], Optional[int]]:
    """@brief Return the USB vendor and product ID of a pyOCD probe, if it exposes them.

    CMSIS-DAP probes carry the IDs on their DAPAccess link. Other probe types give (None, None).
    """
    link = getattr(probe, '_link', None)
    vidpid = getattr(link, 'vidpid', None)
    if not vidpid:
        return None, None
    return vidpid[0], vidpid[1]

class PyOCDCoreHandle(CoreHandle):
    """@brief CoreHandle for one core of a pyOCD target."""

    def __init__(self, core: Any) -> None:
        self._core = core

    def read32(self, addr: int) -> int:
        with translate_errors(exceptions.TransferError, "read of 0x%08x failed" % addr):
            value = self._core.read32(addr)
        LOG.debug("read32(0x%08x) -> 0x%08x", addr, value)
        return value

    def write32(self, addr: int, value: int) -> None:
        LOG.debug("write32(0x%08x, 0x%08x)", addr, value)
        with translate_errors(exceptions.TransferError, "write of 0x%08x failed" % addr):
            self._core.write32(addr, value)

    def reset(self) -> None:
        with translate_errors(exceptions.TransferError, "reset failed"):
            self._core.reset()

class PyOCDTargetSession(TargetSession):
    """@brief TargetSession wrapping an open, fully initialised pyOCD session."""

    def __init__(self, session: Session, target_name: str) -> None:
        self._session = session
        self._target_name = target_name

    @property
    def pyocd_session(self) -> Session:
        return self._session

    @property
    def target_name(self) -> str:
        return self._target_name

    def core(self, index: int = 0) -> CoreHandle:
        try:
            return PyOCDCoreHandle(self._session.target.cores[index])
        except KeyError:
            raise exceptions.ConfigurationError("target %s has no core #%d" % (self._target_name, index))

    def close(self) -> None:
        self._session.close()

class PyOCDRawRegisterInterface(RawRegisterInterface):
    """@brief Raw AP register access through the DebugPort of an uninitialised pyOCD session."""

    def __init__(self, probe: "PyOCDProbe", session: Session) -> None:
        self._probe = probe
        self._session = session
        self._dp = session.target.dp

    def _ap_reg_address(self, ap: ApAddress, offset: int) -> int:
        if not ap.dp.is_default:
            raise exceptions.ConfigurationError("only the default debug port is supported (got %s)" % (ap,))
        return APv1Address(ap.ap).address + offset

    def read_ap_register(self, ap: ApAddress, offset: int) -> int:
        addr = self._ap_reg_address(ap, offset)
        with translate_errors(exceptions.TransferError, "read of %s register 0x%02x failed" % (ap, offset)):
            value = self._dp.read_ap(addr)
        LOG.debug("read_ap(%s, 0x%02x) -> 0x%08x", ap, offset, value)
        return value

    def write_ap_register(self, ap: ApAddress, offset: int, value: int) -> None:
        addr = self._ap_reg_address(ap, offset)
        LOG.debug("write_ap(%s, 0x%02x, 0x%08x)", ap, offset, value)
        with translate_errors(exceptions.TransferError, "write of %s register 0x%02x failed" % (ap, offset)):
            self._dp.write_ap(addr, value)

    def close(self) -> "PyOCDProbe":
        try:
            self._dp.disconnect()
        except pyocd_exceptions.Error as err:
            LOG.debug("Error powering down debug port: %s", err)
        with translate_errors(exceptions.ProbeError, "error releasing probe"):
            self._session.close()
        return self._probe

class PyOCDProbe(Probe):
    """@brief A pyOCD debug probe."""

    def __init__(self, probe: DebugProbe) -> None:
        self._probe = probe
        self._frequency: Optional[int] = None

    @property
    def unique_id(self) -> str:
        return self._probe.unique_id

    @property
    def description(self) -> str:
        return self._probe.description

    def set_speed(self, frequency: int) -> None:
        self._frequency = frequency

    def _session_options(self, target_name: str, auto_unlock: bool) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            'target_override': target_name,
            'auto_unlock': auto_unlock,
            'no_config': True,
            }
        if self._frequency is not None:
            options['frequency'] = self._frequency
        return options

    def attach_unspecified(self) -> PyOCDRawRegisterInterface:
        session = Session(self._probe, auto_open=False,
                options=self._session_options(UNSPECIFIED_TARGET, auto_unlock=False))
        with translate_errors(exceptions.ProbeError, "unable to connect to debug port"):
            session.open(init_board=False)
            try:
                session.target.dp.connect()
            except pyocd_exceptions.Error:
                session.close()
                raise
        return PyOCDRawRegisterInterface(self, session)

    def attach_named_target(self, name: str, permissions: Permissions) -> PyOCDTargetSession:
        session = Session(self._probe, auto_open=False,
                options=self._session_options(name, auto_unlock=permissions.allow_erase_all))
        with translate_errors(exceptions.ProbeError, "unable to attach to target %s" % name):
            try:
                session.open()
            except pyocd_exceptions.Error:
                session.close()
                raise
        return PyOCDTargetSession(session, name)

class PyOCDProbeTransport(ProbeTransport):
    """@brief Finds probes with pyOCD's probe aggregator."""

    def _connected_probes(self) -> List[DebugProbe]:
        with translate_errors(exceptions.ProbeError, "probe enumeration failed"):
            return DebugProbeAggregator.get_all_connected_probes()

    def discover(self, selector: DebugProbeSelector) -> PyOCDProbe:
        for probe in self._connected_probes():
            vendor_id, product_id = probe_usb_ids(probe)
            if selector.matches(vendor_id, product_id, probe.unique_id):
                return PyOCDProbe(probe)
        raise exceptions.ProbeNotFoundError("no probe matching %s" % (selector,))

    def list_probes(self) -> List[ProbeInfo]:
        result = []
        for probe in self._connected_probes():
            vendor_id, product_id = probe_usb_ids(probe)
            result.append(ProbeInfo(vendor_id, product_id, probe.unique_id, probe.description))
        return result

class PyOCDImageProgrammer(ImageProgrammer):
    """@brief Programs images with pyOCD's FileProgrammer."""

    def download(self, session: TargetSession, path: str, image_format: str = 'hex',
            preverify: bool = True) -> None:
        if not isinstance(session, PyOCDTargetSession):
            raise exceptions.ProgrammingError("cannot program through a %s" % type(session).__name__)
        programmer = FileProgrammer(session.pyocd_session, smart_flash=preverify)
        with translate_errors(exceptions.ProgrammingError, "programming %s failed" % path):
            programmer.program(path, file_format=image_format)
