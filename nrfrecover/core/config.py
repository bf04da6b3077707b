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
import os
from typing import (Any, Dict, Optional)
import yaml

from . import exceptions

LOG = logging.getLogger(__name__)

## @brief Config file names searched for in the working directory.
_CONFIG_FILE_NAMES = ["nrfrecover.yaml", "nrfrecover.yml"]

def find_config_file(config_file: Optional[str] = None, project_dir: Optional[str] = None) -> Optional[str]:
    """@brief Locate the config file to use.

    An explicit path wins. Otherwise the default file names are looked up in _project_dir_, which
    defaults to the current working directory.

    @retval None No config file was given and none of the defaults exist.
    """
    if config_file is not None:
        return os.path.expanduser(config_file)
    if project_dir is None:
        project_dir = os.getcwd()
    for filename in _CONFIG_FILE_NAMES:
        path = os.path.join(project_dir, filename)
        if os.path.isfile(path):
            return path
    return None

def load_config(config_file: Optional[str] = None, project_dir: Optional[str] = None,
        no_config: bool = False) -> Dict[str, Any]:
    """@brief Read option values from the YAML config file.

    @return Dictionary of option values, empty if there is no config file or it is empty.
    @exception ConfigurationError The file cannot be read, is not valid YAML, or does not hold a
        top-level mapping.
    """
    if no_config:
        return {}
    path = find_config_file(config_file, project_dir)
    if path is None:
        return {}

    try:
        with open(path, 'r') as config_stream:
            LOG.debug("Loading config from: %s", path)
            config = yaml.safe_load(config_stream)
    except (IOError, yaml.YAMLError) as err:
        raise exceptions.ConfigurationError("cannot load config file '%s': %s" % (path, err)) from err

    # Allow an empty config file.
    if config is None:
        return {}
    elif not isinstance(config, dict):
        raise exceptions.ConfigurationError("configuration file %s does not contain a top-level dictionary"
                % path)
    return config
