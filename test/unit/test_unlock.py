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
import pytest
from unittest.mock import (call, Mock)

from nrfrecover.core import exceptions
from nrfrecover.core.options_manager import OptionsManager
from nrfrecover.family.nrf91 import NRF91Family
from nrfrecover.recovery.unlock import DeviceUnlocker

from mock_device import (MockNRF91Device, MockProbe)

F = NRF91Family

ERASEALL_WRITE = ('write_ap', 4, F.CTRL_AP_ERASEALL, 1)
RESET_PULSE = [('write_ap', 4, F.CTRL_AP_RESET, 1), ('write_ap', 4, F.CTRL_AP_RESET, 0)]

@pytest.fixture(scope='function')
def unlocker():
    return DeviceUnlocker(F)

def status_reads(device):
    return [op for op in device.ops if op == ('read_ap', 4, F.CTRL_AP_ERASEALLSTATUS)]

class TestAlreadyUnlocked:
    def test_no_erase(self, mock_sleep, unlocker):
        device = MockNRF91Device(locked=False)
        probe = MockProbe(device)
        assert unlocker.unlock(probe) is probe
        assert not unlocker.did_erase
        assert device.ops == [('read_ap', 0, F.MEM_AP_CSW)]
        assert device.ap_writes() == []
        assert probe.events == ['attach unspecified', 'release']
        assert mock_sleep.call_count == 0

    def test_force(self, mock_sleep, unlocker):
        device = MockNRF91Device(locked=False)
        probe = MockProbe(device)
        assert unlocker.unlock(probe, force=True) is probe
        assert unlocker.did_erase
        assert device.ap_writes() == [ERASEALL_WRITE] + RESET_PULSE
        assert device.dbg_enabled

class TestLocked:
    def test_unlock(self, mock_sleep, unlocker):
        device = MockNRF91Device(locked=True, erase_busy_polls=2)
        probe = MockProbe(device)
        assert unlocker.unlock(probe) is probe
        assert unlocker.did_erase
        assert device.ops == [
            ('read_ap', 0, F.MEM_AP_CSW),
            ('read_ap', 4, F.CTRL_AP_IDR),
            ERASEALL_WRITE,
            ('read_ap', 4, F.CTRL_AP_ERASEALLSTATUS),
            ('read_ap', 4, F.CTRL_AP_ERASEALLSTATUS),
            ('read_ap', 4, F.CTRL_AP_ERASEALLSTATUS),
            ] + RESET_PULSE + [
            ('read_ap', 0, F.MEM_AP_CSW),
            ]
        assert mock_sleep.call_args_list == [call(0.5), call(0.5), call(0.01), call(0.02)]
        assert probe.events == ['attach unspecified', 'release']

    def test_csw_shows_dbgstatus_after_unlock(self, mock_sleep, unlocker):
        device = MockNRF91Device(locked=True)
        unlocker.unlock(MockProbe(device))
        assert device.read_ap(F.MEM_AP, F.MEM_AP_CSW) & F.CSW_DBGSTATUS_MASK

    def test_delayed_dbgstatus(self, mock_sleep, mock_time, unlocker):
        device = MockNRF91Device(locked=True, unlock_delay_polls=5)
        unlocker.unlock(MockProbe(device))
        assert device.dbg_enabled
        csw_reads = [op for op in device.ops if op == ('read_ap', 0, F.MEM_AP_CSW)]
        # One read before the erase, six after the reset.
        assert len(csw_reads) == 7

    def test_never_unlocks(self, mock_sleep, mock_time, unlocker):
        device = MockNRF91Device(locked=True, unlocks_after_reset=False)
        probe = MockProbe(device)
        with pytest.raises(exceptions.UnlockError):
            unlocker.unlock(probe)
        assert mock_time.return_value >= 1.0
        assert probe.events == ['attach unspecified', 'release']
        assert not unlocker.did_erase

    def test_erase_timeout_continues(self, mock_sleep, mock_time, unlocker, caplog):
        device = MockNRF91Device(locked=True, erase_busy_polls=None)
        with caplog.at_level(logging.WARNING):
            unlocker.unlock(MockProbe(device))
        assert unlocker.did_erase
        assert 30 <= len(status_reads(device)) <= 32
        assert mock_time.return_value > 15.0
        assert device.ap_writes() == [ERASEALL_WRITE] + RESET_PULSE
        assert "did not clear" in caplog.text

    def test_erase_timeout_option(self, mock_sleep, mock_time):
        options = OptionsManager()
        options.add_front({'unlock.erase_timeout': 2.0, 'unlock.erase_poll_interval': 1.0})
        device = MockNRF91Device(locked=True, erase_busy_polls=None)
        DeviceUnlocker(F, options).unlock(MockProbe(device))
        assert len(status_reads(device)) == 4
        assert mock_time.return_value < 4.0

class TestCtrlApIdr:
    def test_zero_idr(self, mock_sleep, unlocker):
        device = MockNRF91Device(locked=True, ctrl_idr=0)
        probe = MockProbe(device)
        with pytest.raises(exceptions.ConfigurationError) as excinfo:
            unlocker.unlock(probe)
        assert str(excinfo.value) == "invalid CTRL-AP IDR at AP#4@DP(default), check AP index"
        assert device.ap_writes() == []
        assert probe.events == ['attach unspecified', 'release']

    def test_idr_read_error(self, mock_sleep, unlocker):
        device = MockNRF91Device(locked=True, idr_error=True)
        probe = MockProbe(device)
        with pytest.raises(exceptions.ConfigurationError) as excinfo:
            unlocker.unlock(probe)
        assert "AP#4@DP(default)" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, exceptions.TransferError)
        assert device.ap_writes() == []
        assert probe.events == ['attach unspecified', 'release']

    def test_unexpected_idr(self, mock_sleep, unlocker, caplog):
        device = MockNRF91Device(locked=True, ctrl_idr=0x24770011)
        with caplog.at_level(logging.WARNING):
            unlocker.unlock(MockProbe(device))
        assert unlocker.did_erase
        assert "Unexpected CTRL-AP IDR 0x24770011" in caplog.text

class TestTransferErrors:
    def test_csw_read_error(self, mock_sleep, unlocker):
        device = MockNRF91Device(locked=True)
        device.read_ap = Mock(side_effect=exceptions.TransferError("SWD fault"))
        probe = MockProbe(device)
        with pytest.raises(exceptions.TransferError):
            unlocker.unlock(probe)
        assert probe.events == ['attach unspecified', 'release']

    def test_erase_write_error(self, mock_sleep, unlocker):
        device = MockNRF91Device(locked=True)
        device.write_ap = Mock(side_effect=exceptions.TransferError("SWD fault"))
        with pytest.raises(exceptions.TransferError):
            unlocker.unlock(MockProbe(device))
        assert status_reads(device) == []

class TestRelease:
    @pytest.mark.parametrize("error", [
        RuntimeError("usb stack gone"),
        KeyboardInterrupt(),
        ])
    def test_released_on_any_exception(self, mock_sleep, unlocker, monkeypatch, error):
        device = MockNRF91Device(locked=True)
        probe = MockProbe(device)
        monkeypatch.setattr(device, 'read_ap', Mock(side_effect=error))
        with pytest.raises(type(error)):
            unlocker.unlock(probe)
        assert probe.events == ['attach unspecified', 'release']

    def test_release_error_does_not_mask_cause(self, mock_sleep, unlocker, monkeypatch):
        device = MockNRF91Device(locked=True, ctrl_idr=0)
        probe = MockProbe(device)
        real_attach = probe.attach_unspecified

        def attach():
            iface = real_attach()
            monkeypatch.setattr(iface, 'close', Mock(side_effect=exceptions.ProbeError("gone")))
            return iface
        monkeypatch.setattr(probe, 'attach_unspecified', attach)
        with pytest.raises(exceptions.ConfigurationError):
            unlocker.unlock(probe)
