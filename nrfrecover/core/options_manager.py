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
from typing import (Any, Dict, List, Mapping, Optional)

from .options import OPTIONS_INFO
from . import exceptions

LOG = logging.getLogger(__name__)

class OptionsManager(object):
    """@brief Layered lookup of option values.

    When an option is read, the highest priority layer holding a value for it wins. The default
    declared in OPTIONS_INFO acts as a layer with infinitely low priority. The tool stacks, from
    highest to lowest: explicit command line arguments, `-O` settings, the config file.

    Values are checked against the declared option type as layers are added. An int is accepted
    for a float option and converted. Unknown option names are dropped with a warning.
    """

    def __init__(self) -> None:
        self._layers: List[Dict[str, Any]] = []

    def add_front(self, new_options: Optional[Mapping[str, Any]]) -> None:
        """@brief Add a new highest priority layer of option values."""
        if new_options is not None:
            self._layers.insert(0, self._convert_options(new_options))

    def add_back(self, new_options: Optional[Mapping[str, Any]]) -> None:
        """@brief Add a new lowest priority layer of option values."""
        if new_options is not None:
            self._layers.append(self._convert_options(new_options))

    def _convert_options(self, new_options: Mapping[str, Any]) -> Dict[str, Any]:
        """@brief Prepare a dictionary of options for use by the manager.

        1. Strip entries with a value of None.
        2. Replace double-underscores ("__") with a dot (".") and lowercase the name.
        3. Drop unknown names and reject values of the wrong type.

        @exception ConfigurationError An option value has the wrong type.
        """
        output = {}
        for name, value in new_options.items():
            if value is None:
                continue
            name = name.replace("__", ".").lower()
            try:
                info = OPTIONS_INFO[name]
            except KeyError:
                LOG.warning("ignoring unknown option '%s'", name)
                continue
            types = info.type if isinstance(info.type, tuple) else (info.type,)
            if (float in types) and isinstance(value, int) and not isinstance(value, bool):
                value = float(value)
            elif not isinstance(value, types) or (isinstance(value, bool) and bool not in types):
                raise exceptions.ConfigurationError("invalid value %r for option '%s'" % (value, name))
            output[name] = value
        return output

    def is_set(self, key: str) -> bool:
        """@brief Return whether any layer holds a value for the option."""
        return any(key in layer for layer in self._layers)

    def get_default(self, key: str) -> Any:
        """@brief Return the declared default value for the option."""
        if key in OPTIONS_INFO:
            return OPTIONS_INFO[key].default
        else:
            return None

    def get(self, key: str) -> Any:
        """@brief Return the highest priority value for the option, or its default."""
        for layer in self._layers:
            if key in layer:
                return layer[key]
        return self.get_default(key)

    def __contains__(self, key: str) -> bool:
        return self.is_set(key)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)
