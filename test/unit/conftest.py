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
from unittest.mock import Mock

from mock_device import (MockNRF91Device, MockProbe, MockProbeTransport, MockImageProgrammer)

## Sample Intel HEX image: 16 bytes at 0x00000000.
HEX_IMAGE = (
    ":10000000000004200D0100000F010000110100009C\n"
    ":00000001FF\n"
    )

@pytest.fixture(scope='function')
def mock_time(monkeypatch):
    mtime = Mock()
    mtime.return_value = 0
    monkeypatch.setattr('nrfrecover.utility.timeout.time', mtime)
    monkeypatch.setattr('nrfrecover.recovery.unlock.time', mtime)
    return mtime

@pytest.fixture(scope='function')
def mock_sleep(monkeypatch, mock_time):
    def inc_time(offset):
        mock_time.return_value += offset
    msleep = Mock()
    msleep.side_effect = inc_time
    msleep.return_value = None
    monkeypatch.setattr('nrfrecover.utility.timeout.sleep', msleep)
    monkeypatch.setattr('nrfrecover.recovery.unlock.sleep', msleep)
    return msleep

@pytest.fixture(scope='function')
def device():
    return MockNRF91Device()

@pytest.fixture(scope='function')
def probe(device):
    return MockProbe(device)

@pytest.fixture(scope='function')
def transport(probe):
    return MockProbeTransport(probe)

@pytest.fixture(scope='function')
def programmer():
    return MockImageProgrammer()

@pytest.fixture(scope='function')
def hex_image(tmp_path):
    path = tmp_path / "app.hex"
    path.write_text(HEX_IMAGE)
    return str(path)
