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

import colorama
import logging
import pytest

from nrfrecover.__main__ import RecoverTool
from nrfrecover.family.nrf91 import UICR_APPROTECT, UICR_SECUREAPPROTECT
from nrfrecover.probe.selector import DebugProbeSelector

from mock_device import (MockNRF91Device, MockProbe, MockProbeTransport)

MILESTONES = [
    "Got probe E6614C311B4B8C2A",
    "Unlocked device!",
    "Created session for nrf91!",
    "Done flashing!",
    "Wrote 2 protection word(s)",
    "Done!",
    ]

@pytest.fixture(autouse=True)
def restore_logging(capsys):
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    colorama.deinit()

@pytest.fixture(scope='function')
def tool(monkeypatch, transport, programmer):
    monkeypatch.setattr('nrfrecover.__main__.PyOCDProbeTransport', lambda: transport)
    monkeypatch.setattr('nrfrecover.__main__.PyOCDImageProgrammer', lambda: programmer)
    return RecoverTool()

def run_tool(tool, *args):
    return tool.run(['--no-config', '--color', 'never'] + list(args))

class TestRecoverTool:
    def test_happy_path(self, mock_sleep, tool, hex_image, device, capsys):
        assert run_tool(tool, hex_image) == 0
        out, err = capsys.readouterr()
        assert out.splitlines() == MILESTONES
        assert device.memory[UICR_APPROTECT] == 0x50FA50FA
        assert device.memory[UICR_SECUREAPPROTECT] == 0x50FA50FA
        assert device.ops[-1] == ('reset',)

    def test_missing_image(self, mock_sleep, tool, tmp_path, transport, capsys):
        assert run_tool(tool, str(tmp_path / "nope.hex")) == 1
        out, err = capsys.readouterr()
        assert transport.discover_calls == 0
        assert out == ""
        assert "check configuration failed: file not found" in err

    def test_probe_timeout(self, mock_sleep, monkeypatch, hex_image, programmer, capsys):
        transport = MockProbeTransport(None)
        monkeypatch.setattr('nrfrecover.__main__.PyOCDProbeTransport', lambda: transport)
        monkeypatch.setattr('nrfrecover.__main__.PyOCDImageProgrammer', lambda: programmer)
        assert run_tool(RecoverTool(), '--timeout', '500', hex_image) == 1
        out, err = capsys.readouterr()
        assert "Timeout connecting to probe after 500ms" in err
        assert out == ""
        assert transport.discover_calls > 1

    def test_selector_args(self, mock_sleep, tool, hex_image, transport):
        assert run_tool(tool, '--vendor-id', '0x1366', '--product-id', '4177', '-s', 'ABC', hex_image) == 0
        selector = transport.selectors[0]
        assert (selector.vendor_id, selector.product_id, selector.serial_number) == (0x1366, 4177, "ABC")

    def test_default_selector(self, mock_sleep, tool, hex_image, transport):
        assert run_tool(tool, hex_image) == 0
        assert transport.selectors[0] == DebugProbeSelector(0x2e8a, 0x000c, None)

    def test_probe_arg(self, mock_sleep, tool, hex_image, transport):
        assert run_tool(tool, '--probe', '2e8a:000c:e6614c311b4b8c2a', '--vendor-id', '0x1366',
                hex_image) == 0
        assert transport.selectors[0] == DebugProbeSelector(0x2e8a, 0x000c, "e6614c311b4b8c2a")

    @pytest.mark.parametrize("args", [
        ('--probe', '2e8a'),
        ('--vendor-id', 'raspberry'),
        ])
    def test_bad_selector(self, tool, hex_image, transport, capsys, args):
        assert run_tool(tool, *args, hex_image) == 1
        out, err = capsys.readouterr()
        assert "invalid probe selection" in err
        assert transport.discover_calls == 0

    def test_colored_milestones(self, mock_sleep, tool, hex_image, capsys):
        assert tool.run(['--no-config', '--color', 'always', hex_image]) == 0
        out, err = capsys.readouterr()
        assert colorama.Fore.GREEN + "Done!" in out

    def test_force(self, mock_sleep, monkeypatch, hex_image, programmer, capsys):
        device = MockNRF91Device(locked=False)
        transport = MockProbeTransport(MockProbe(device))
        monkeypatch.setattr('nrfrecover.__main__.PyOCDProbeTransport', lambda: transport)
        monkeypatch.setattr('nrfrecover.__main__.PyOCDImageProgrammer', lambda: programmer)
        assert run_tool(RecoverTool(), '--force', hex_image) == 0
        out, err = capsys.readouterr()
        assert "Unlocked device!" in out.splitlines()
        assert device.erased

    def test_force_option(self, mock_sleep, monkeypatch, hex_image, programmer):
        device = MockNRF91Device(locked=False)
        transport = MockProbeTransport(MockProbe(device))
        monkeypatch.setattr('nrfrecover.__main__.PyOCDProbeTransport', lambda: transport)
        monkeypatch.setattr('nrfrecover.__main__.PyOCDImageProgrammer', lambda: programmer)
        assert run_tool(RecoverTool(), '-O', 'unlock.force', hex_image) == 0
        assert device.erased

    def test_uicr_args(self, mock_sleep, tool, hex_image, device):
        assert run_tool(tool, '-u', '0x00FF8000=0x0', hex_image) == 0
        assert device.memory == {UICR_APPROTECT: 0}

    def test_config_file(self, mock_sleep, monkeypatch, tmp_path, hex_image, programmer, capsys):
        config = tmp_path / "recover.yaml"
        config.write_text("probe.timeout: 300\n")
        transport = MockProbeTransport(None)
        monkeypatch.setattr('nrfrecover.__main__.PyOCDProbeTransport', lambda: transport)
        monkeypatch.setattr('nrfrecover.__main__.PyOCDImageProgrammer', lambda: programmer)
        status = RecoverTool().run(['--color', 'never', '--config', str(config), hex_image])
        assert status == 1
        out, err = capsys.readouterr()
        assert "after 300ms" in err

    def test_command_line_beats_config(self, mock_sleep, monkeypatch, tmp_path, hex_image, programmer, capsys):
        config = tmp_path / "recover.yaml"
        config.write_text("probe.timeout: 300\n")
        transport = MockProbeTransport(None)
        monkeypatch.setattr('nrfrecover.__main__.PyOCDProbeTransport', lambda: transport)
        monkeypatch.setattr('nrfrecover.__main__.PyOCDImageProgrammer', lambda: programmer)
        status = RecoverTool().run(['--color', 'never', '--config', str(config), '-t', '700', hex_image])
        assert status == 1
        out, err = capsys.readouterr()
        assert "after 700ms" in err

    def test_bad_config_file(self, mock_sleep, tool, tmp_path, hex_image, transport, capsys):
        config = tmp_path / "recover.yaml"
        config.write_text("- just\n- a list\n")
        assert tool.run(['--color', 'never', '--config', str(config), hex_image]) == 1
        out, err = capsys.readouterr()
        assert "top-level dictionary" in err
        assert transport.discover_calls == 0

    def test_list(self, tool, capsys):
        assert run_tool(tool, '--list') == 0
        out, err = capsys.readouterr()
        assert "2e8a:000c" in out
        assert "E6614C311B4B8C2A" in out

    def test_list_empty(self, monkeypatch, capsys):
        monkeypatch.setattr('nrfrecover.__main__.PyOCDProbeTransport', lambda: MockProbeTransport(None))
        assert run_tool(RecoverTool(), '--list') == 0
        out, err = capsys.readouterr()
        assert "No available debug probes" in out

    def test_help_options(self, tool, capsys):
        assert run_tool(tool, '--help-options') == 0
        out, err = capsys.readouterr()
        assert "unlock.erase_timeout" in out
        assert "nvmc.ready_timeout" in out

    def test_image_required(self, tool):
        with pytest.raises(SystemExit) as excinfo:
            run_tool(tool)
        assert excinfo.value.code == 2

    def test_bad_log_level(self, tool, hex_image, transport):
        assert run_tool(tool, '-L', 'nrfrecover=loud', hex_image) == 1
        assert transport.discover_calls == 0

    def test_log_level(self, mock_sleep, tool, hex_image):
        assert run_tool(tool, '-L', 'nrfrecover.recovery.unlock=debug', hex_image) == 0
        assert logging.getLogger('nrfrecover.recovery.unlock').level == logging.DEBUG
        logging.getLogger('nrfrecover.recovery.unlock').setLevel(logging.NOTSET)
