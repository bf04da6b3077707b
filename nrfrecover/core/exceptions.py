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

class Error(RuntimeError):
    """@brief Parent of all errors nrfrecover can raise"""
    pass

class ConfigurationError(Error):
    """@brief A precondition or configuration problem that retrying cannot fix.

    Raised for a missing or unreadable image, an unknown target family, invalid option values, and
    a CTRL-AP that does not identify itself (IDR of 0, usually a wrong AP index).
    """
    pass

class TimeoutError(Error):
    """@brief A bounded wait expired"""
    pass

class ProbeError(Error):
    """@brief Error communicating with the debug probe"""
    pass

class ProbeNotFoundError(ProbeError):
    """@brief No connected probe matches the selector"""
    pass

class ProbeTimeoutError(ProbeError):
    """@brief No matching probe appeared before the connection deadline.

    The timeout in milliseconds is available from the `timeout_ms` attribute and is included in
    the message.
    """
    def __init__(self, timeout_ms: int) -> None:
        super().__init__("Timeout connecting to probe after %dms" % timeout_ms)
        self.timeout_ms = timeout_ms

class TransferError(ProbeError):
    """@brief A raw AP register or target memory access failed"""
    pass

class UnlockError(Error):
    """@brief The access port did not become debuggable after erase and reset"""
    pass

class ProgrammingError(Error):
    """@brief Writing the image into target flash failed"""
    pass

class ProtectionWriteError(Error):
    """@brief A protection configuration word cannot be written without an erase.

    Words in UICR can only have bits cleared by programming. The desired value, the current value
    and the address are recorded and included in the description.
    """
    def __init__(self, address: int, current: int, desired: int) -> None:
        super().__init__()
        self.address = address
        self.current = current
        self.desired = desired

    def __str__(self) -> str:
        return "cannot write 0x%08x to UICR @ 0x%08x (holds 0x%08x); mass erase needed" % (
                self.desired, self.address, self.current)

class StageError(Error):
    """@brief A recovery stage failed.

    Wraps the underlying error so the user sees which stage failed and why. The original error is
    available as the `cause` attribute and is also chained as `__cause__`.
    """
    def __init__(self, stage: str, cause: BaseException) -> None:
        super().__init__(stage, cause)
        self.stage = stage
        self.cause = cause

    def __str__(self) -> str:
        return "%s failed: %s" % (self.stage, self.cause)
