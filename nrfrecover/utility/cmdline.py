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
from typing import (Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union)

from ..core.options import OPTIONS_INFO

LOG = logging.getLogger(__name__)

def convert_options(option_list: Optional[Iterable[str]]) -> Dict[str, Any]:
    """@brief Convert a list of `-O NAME=VALUE` settings to a dictionary.

    A bool option given without a value is set to True, or to False with a "no-" prefix. Unknown
    names and unconvertible values are dropped with a warning.
    """
    options: Dict[str, Any] = {}
    if option_list is None:
        return options
    for o in option_list:
        if '=' in o:
            name, value = o.split('=', 1)
            name = name.strip().lower()
            value = value.strip()
        else:
            name = o.strip().lower()
            value = None

        # Check for and strip "no-" prefix before we validate the option name.
        if (value is None) and (name.startswith('no-')):
            name = name[3:]
            had_no_prefix = True
        else:
            had_no_prefix = False

        try:
            info = OPTIONS_INFO[name]
        except KeyError:
            LOG.warning("ignoring unknown option '%s'", name)
            continue

        types = info.type if isinstance(info.type, tuple) else (info.type,)

        # Handle bool options without a value specially.
        if value is None:
            if bool in types:
                value = not had_no_prefix
            else:
                LOG.warning("non-boolean option '%s' requires a value", name)
                continue
        elif bool in types:
            if value.lower() in ("true", "1", "yes", "on", "false", "0", "no", "off"):
                value = value.lower() in ("true", "1", "yes", "on")
            else:
                LOG.warning("invalid value for option '%s'", name)
                continue
        elif int in types:
            try:
                value = int(value, base=0)
            except ValueError:
                LOG.warning("invalid value for option '%s'", name)
                continue
        elif float in types:
            try:
                value = float(value)
            except ValueError:
                LOG.warning("invalid value for option '%s'", name)
                continue
        elif list in types:
            value = [v.strip() for v in value.split(',') if v.strip()]

        options[name] = value
    return options

def convert_frequency(value: str) -> int:
    """@brief Applies scale suffix to frequency value string.
    @param value String with a float and possible 'k' or 'm' suffix (case-insensitive). "Hz" may
        also follow. No space is allowed between the float and suffix. Leading and trailing
        whitespace is allowed.
    @return Integer scaled according to optional metric suffix.
    """
    value = value.strip().lower()
    if value.endswith("hz"):
        value = value[:-2]
    suffix = value[-1]
    if suffix in ('k', 'm'):
        fvalue = float(value[:-1])
        if suffix == 'k':
            fvalue *= 1000
        elif suffix == 'm':
            fvalue *= 1000000
        return int(fvalue)
    else:
        return int(float(value))

def int_base_0(x: str) -> int:
    """@brief Converts a string to an int with support for base prefixes."""
    return int(x, base=0)

def convert_word_setting(value: str) -> Tuple[int, int]:
    """@brief Convert an `ADDR=VALUE` string to an (address, value) pair.

    Both numbers accept base prefixes.
    @exception ValueError The string is malformed or a number is not a valid 32-bit value.
    """
    if '=' not in value:
        raise ValueError("invalid word setting '%s' (expected ADDR=VALUE)" % value)
    addr_str, value_str = value.split('=', 1)
    addr = int_base_0(addr_str.strip())
    word = int_base_0(value_str.strip())
    if not (0 <= addr <= 0xffffffff) or not (0 <= word <= 0xffffffff):
        raise ValueError("word setting '%s' out of 32-bit range" % value)
    if addr & 0x3:
        raise ValueError("address 0x%x in '%s' is not word aligned" % (addr, value))
    return addr, word

def convert_word_settings(settings: Union[Mapping[Any, Any], Iterable[Any]]) -> List[Tuple[int, int]]:
    """@brief Convert protection word settings to a list of (address, value) pairs.

    Accepts a mapping of address to value, as read from a YAML config file, or an iterable of
    `ADDR=VALUE` strings. Mapping keys and values may be ints or strings with base prefixes.
    @exception ValueError A setting is malformed.
    """
    if isinstance(settings, Mapping):
        return [convert_word_setting("%s=%s" % (k, v)) for k, v in settings.items()]
    return [convert_word_setting(str(s)) for s in settings]
