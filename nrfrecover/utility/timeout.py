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

from time import (time, sleep)
from typing import (Callable, Optional)

class Timeout(object):
    """@brief Deadline tracker for sleep-and-recheck loops.

    Intended to be the predicate of a while loop, with the success case leaving via `break` and
    the timeout case handled by the loop's else block:

    @code
    with Timeout(15.0, sleeptime=0.5) as t_o:
        while t_o.check():
            if read_status() == 0:
                break
        else:
            LOG.warning("gave up")
    @endcode

    A _timeout_ of None never expires; the loop must then be left with `break`.

    If _sleeptime_ is non-zero, check() sleeps for that long on every call after the first one
    unless the deadline has passed, so the first poll happens immediately.
    """

    def __init__(self, timeout: Optional[float], sleeptime: float = 0) -> None:
        """@brief Constructor.
        @param self
        @param timeout Seconds until expiry, or None for no expiry.
        @param sleeptime Seconds to sleep between checks. Zero disables auto-sleep.
        """
        self._sleeptime = sleeptime
        self._timeout = timeout
        self._timed_out = False
        self._start = -1.0
        self._is_first_check = True

    def __enter__(self) -> "Timeout":
        self._start = time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    def check(self) -> bool:
        """@brief Check for expiry, sleeping first if this is not the first call.

        @retval True The deadline has not passed; keep looping.
        @retval False The deadline has passed.
        """
        if (self._timeout is not None) and ((time() - self._start) > self._timeout):
            self._timed_out = True
        elif (not self._is_first_check) and self._sleeptime:
            sleep(self._sleeptime)
        self._is_first_check = False
        return not self._timed_out

def poll_until(predicate: Callable[[], bool], timeout: Optional[float], interval: float) -> bool:
    """@brief Call _predicate_ every _interval_ seconds until it returns True or _timeout_ expires.

    The predicate is evaluated immediately, then once after each sleep. Exceptions raised by the
    predicate propagate to the caller unchanged.

    @param predicate Callable returning a truthy value once the awaited condition holds.
    @param timeout Seconds to wait, or None to wait without bound.
    @param interval Seconds to sleep between evaluations.
    @retval True The predicate was satisfied.
    @retval False The timeout expired first. Never returned when _timeout_ is None.
    """
    with Timeout(timeout, sleeptime=interval) as t_o:
        while t_o.check():
            if predicate():
                return True
    return False
