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
from typing import List

from ..core import exceptions
from ..utility.timeout import poll_until
from .debug_probe import (Probe, ProbeTransport)
from .selector import DebugProbeSelector

LOG = logging.getLogger(__name__)

def acquire_probe(transport: ProbeTransport, selector: DebugProbeSelector, timeout_ms: int,
        retry_interval: float = 0.1) -> Probe:
    """@brief Discover and open a probe, retrying until _timeout_ms_ passes.

    Any probe error during discovery counts as "not there yet". Errors of other kinds propagate.

    @exception ProbeTimeoutError No matching probe could be opened before the deadline.
    """
    LOG.debug("Looking for probe %s (timeout %dms)", selector, timeout_ms)
    found: List[Probe] = []

    def discover() -> bool:
        try:
            found.append(transport.discover(selector))
        except exceptions.ProbeError as err:
            LOG.debug("Probe %s not available: %s", selector, err)
            return False
        return True

    if not poll_until(discover, timeout_ms / 1000.0, retry_interval):
        raise exceptions.ProbeTimeoutError(timeout_ms)
    probe = found[0]
    LOG.info("Opened probe %s (%s)", probe.unique_id, probe.description)
    return probe
