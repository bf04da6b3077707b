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
from collections import OrderedDict
from collections.abc import Callable
from typing import Tuple

from ..core import exceptions

LOG = logging.getLogger(__name__)

class StageSequence(object):
    """@brief Ordered sequence of named stages that stops at the first failure.

    Each stage is a 2-tuple of a name and a callable taking no arguments. Stages run strictly in
    order. If a stage raises an nrfrecover error, the remaining stages are skipped and the error is
    reraised wrapped in a @ref nrfrecover.core.exceptions.StageError "StageError" naming the stage.
    Nothing is rolled back.
    """

    def __init__(self, *args: Tuple[str, Callable]) -> None:
        for i in args:
            assert len(i) == 2
            assert type(i[0]) is str
            assert isinstance(i[1], Callable)
        self._stages = OrderedDict(args)

    def invoke(self) -> None:
        """@brief Run each stage in order.
        @exception StageError Wraps the error raised by the failing stage.
        """
        for name, call in self._stages.items():
            LOG.debug("Running stage %s", name)
            try:
                call()
            except exceptions.StageError:
                raise
            except exceptions.Error as err:
                raise exceptions.StageError(name, err) from err

    def __repr__(self) -> str:
        return "<%s@%x: %s>" % (self.__class__.__name__, id(self), ", ".join(self._stages.keys()))
