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

from typing import (Any, Dict, List, NamedTuple, Tuple, Union)

class OptionInfo(NamedTuple):
    name: str
    type: Union[type, Tuple[type, ...]]
    default: Any
    help: str

## @brief Definitions of the builtin options.
BUILTIN_OPTIONS = [
    OptionInfo('debug.traceback', bool, False,
        "Print tracebacks for errors. Enabled automatically with debug logging."),
    OptionInfo('family', str, "nrf91",
        "Target family whose register map and constants are used."),
    OptionInfo('frequency', int, 12000000,
        "SWD clock frequency in Hz."),
    OptionInfo('image.format', str, "hex",
        "Format of the image file passed to the programmer."),
    OptionInfo('image.preverify', bool, True,
        "Compare flash contents before programming and skip pages that already match."),
    OptionInfo('nvmc.poll_interval', float, 0.001,
        "Seconds between reads of NVMC.READY."),
    OptionInfo('nvmc.ready_timeout', (float, type(None)), None,
        "Seconds to wait for NVMC.READY before failing. The default of no value waits forever."),
    OptionInfo('probe.retry_interval', float, 0.1,
        "Seconds between probe discovery attempts."),
    OptionInfo('probe.timeout', int, 2000,
        "Milliseconds to keep retrying probe discovery."),
    OptionInfo('target_override', str, None,
        "Named target used for the programming session. Defaults to the family's target name."),
    OptionInfo('uicr.words', (dict, list), None,
        "Protection words to write after programming, as a mapping of address to value or a list "
        "of 'ADDR=VALUE' strings. Defaults to the family's protection words."),
    OptionInfo('unlock.erase_poll_interval', float, 0.5,
        "Seconds between reads of CTRL-AP ERASEALLSTATUS."),
    OptionInfo('unlock.erase_timeout', float, 15.0,
        "Seconds to wait for ERASEALLSTATUS to clear. Recovery continues when this expires."),
    OptionInfo('unlock.force', bool, False,
        "Run the erase and reset sequence even if the device reports debug access enabled."),
    OptionInfo('unlock.post_reset_delay', float, 0.02,
        "Seconds to wait after the CTRL-AP reset pulse."),
    OptionInfo('unlock.pre_reset_delay', float, 0.01,
        "Seconds to wait between erase completion and the CTRL-AP reset pulse."),
    OptionInfo('unlock.verify_poll_interval', float, 0.1,
        "Seconds between reads of the memory AP CSW after reset."),
    OptionInfo('unlock.verify_timeout', float, 1.0,
        "Seconds DbgStatus may stay clear after reset before unlocking is declared failed."),
    ]

## @brief The runtime dictionary of options.
OPTIONS_INFO: Dict[str, OptionInfo] = {}

def add_option_set(options: List[OptionInfo]) -> None:
    """@brief Merge a list of OptionInfo objects into OPTIONS_INFO."""
    OPTIONS_INFO.update({oi.name: oi for oi in options})

# Start with only builtin options.
add_option_set(BUILTIN_OPTIONS)
