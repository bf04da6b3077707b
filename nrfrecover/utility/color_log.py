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
from colorama import (Fore, Style)
import logging
import sys
from typing import (IO, Optional)

def use_color_for(color_setting: str, is_tty: Optional[bool] = None) -> bool:
    """@brief Decide whether to colour output for a `--color` setting.

    'auto' colours only when both stdout and stderr are ttys, since milestones go to stdout and log
    records to stderr. _is_tty_ overrides the tty check.
    """
    if color_setting == "always":
        return True
    if color_setting != "auto":
        return False
    if is_tty is None:
        is_tty = all(getattr(s, 'isatty', lambda: False)() for s in (sys.stdout, sys.stderr))
    return is_tty

class ColorFormatter(logging.Formatter):
    """@brief Formats log records as `LEVEL message [logger]`, coloured by level.

    The logger name is shown without the leading `nrfrecover.` so that unlock and protection
    traffic reads as `[recovery.unlock]`. Tracebacks are appended dimmed.
    """

    FORMAT = "{lvlcolor}{levelname:<8s}{reset} {msgcolor}{message}{reset} {dim}[{shortname}]{reset}"

    LEVEL_COLORS = {
            'CRITICAL': Style.BRIGHT + Fore.LIGHTRED_EX,
            'ERROR': Fore.LIGHTRED_EX,
            'WARNING': Fore.LIGHTYELLOW_EX,
            'INFO': Fore.CYAN,
            'DEBUG': Style.DIM,
        }

    MESSAGE_COLORS = {
            'CRITICAL': Fore.LIGHTRED_EX,
            'ERROR': Fore.RED,
            'WARNING': Fore.YELLOW,
            'DEBUG': Style.DIM,
        }

    def __init__(self, use_color: bool) -> None:
        super().__init__(self.FORMAT, style='{')
        self._use_color = use_color

    def _color(self, code: str) -> str:
        return code if self._use_color else ""

    def format(self, record: logging.LogRecord) -> str:
        exc_info, record.exc_info = record.exc_info, None

        record.lvlcolor = self._color(self.LEVEL_COLORS.get(record.levelname, ''))
        record.msgcolor = self._color(self.MESSAGE_COLORS.get(record.levelname, ''))
        record.dim = self._color(Style.DIM)
        record.reset = self._color(Style.RESET_ALL)
        record.shortname = record.name[len("nrfrecover."):] \
                if record.name.startswith("nrfrecover.") else record.name
        record.message = record.getMessage()

        log_msg = super().format(record)
        if exc_info:
            log_msg += "\n" + record.dim + self.formatException(exc_info) + record.reset
        return log_msg

class MilestonePrinter(object):
    """@brief Prints recovery milestones to stdout, in bright green when colouring.

    Instances are passed as the output callable of a recovery run, so milestones share the colour
    decision made for log records.
    """

    def __init__(self, use_color: bool, stream: Optional[IO[str]] = None) -> None:
        self._use_color = use_color
        self._stream = stream

    def __call__(self, message: str) -> None:
        if self._use_color:
            message = Style.BRIGHT + Fore.GREEN + message + Style.RESET_ALL
        print(message, file=(self._stream or sys.stdout), flush=True)

def build_color_logger(level: int = logging.WARNING, use_color: bool = False,
        stream: Optional[IO[str]] = None) -> logging.Logger:
    """@brief Attach a colour console handler for stderr to the root logger and set its level."""
    colorama.init(strip=(not use_color))

    console = logging.StreamHandler(stream if (stream is not None) else sys.stderr)
    console.setFormatter(ColorFormatter(use_color))

    root_logger = logging.getLogger()
    root_logger.addHandler(console)
    root_logger.setLevel(level)
    return root_logger
