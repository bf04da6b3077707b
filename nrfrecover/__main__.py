#!/usr/bin/env python

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

import os
import sys
import logging
import argparse
import colorama
import fnmatch
import prettytable
from typing import (Any, Dict, Optional, Sequence)

from . import __version__
from .core import exceptions
from .core import options
from .core.config import load_config
from .core.options_manager import OptionsManager
from .probe.pyocd_backend import (PyOCDImageProgrammer, PyOCDProbeTransport)
from .probe.selector import (DEFAULT_PRODUCT_ID, DEFAULT_VENDOR_ID, DebugProbeSelector)
from .recovery.orchestrator import RecoveryRun
from .utility.cmdline import (convert_frequency, convert_options)
from .utility.color_log import (MilestonePrinter, build_color_logger, use_color_for)

## @brief Logger for this module.
LOG = logging.getLogger("nrfrecover.tool")

class RecoverTool(object):
    """@brief Command line tool that unlocks, reflashes and protects an nRF91 device."""

    HELP = "Recover a locked nRF91 device: unlock through the CTRL-AP, program an image, and " \
           "write the protection words."

    DEFAULT_LOG_LEVEL = logging.WARNING

    ## @brief Logging level names.
    LOG_LEVEL_NAMES = {
            'debug': logging.DEBUG,
            'info': logging.INFO,
            'warning': logging.WARNING,
            'error': logging.ERROR,
            'critical': logging.CRITICAL,
            }

    def __init__(self) -> None:
        self._args = argparse.Namespace()
        self._options: Optional[OptionsManager] = None
        self._use_color = False
        self._parser = self.build_parser()

    def build_parser(self) -> argparse.ArgumentParser:
        """@brief Construct the command line parser."""
        parser = argparse.ArgumentParser(prog="nrfrecover", description=self.HELP)

        parser.add_argument('-V', '--version', action='version', version=__version__)
        parser.add_argument('--help-options', action='store_true',
            help="Display available options.")
        parser.add_argument('image', metavar="IMAGE", nargs='?',
            help="Path to the image file to flash.")

        recovery_group = parser.add_argument_group("recovery")
        recovery_group.add_argument('-f', '--force', action='store_true', default=None,
            help="Force unlock even if the device appears unlocked. Erases the device.")
        recovery_group.add_argument('--target', dest='target_override', metavar="TARGET",
            help="Target type used for programming. Defaults to the family's target.")
        recovery_group.add_argument('-u', '--uicr', action='append', metavar="ADDR=VALUE",
            help="Protection word to write after programming, replacing the family defaults. "
            "Can be specified multiple times.")

        probe_group = parser.add_argument_group("probe")
        probe_group.add_argument('-t', '--timeout', type=int, metavar="MS",
            help="Timeout in milliseconds for probe connection. Default is 2000.")
        probe_group.add_argument('--probe', metavar="VID:PID[:SERIAL]",
            help="Debug probe to use, with the USB IDs in hex. Overrides --vendor-id, --product-id "
            "and --serial.")
        probe_group.add_argument('--vendor-id', metavar="ID",
            help="USB vendor ID of the debug probe. Default is 0x%04x." % DEFAULT_VENDOR_ID)
        probe_group.add_argument('--product-id', metavar="ID",
            help="USB product ID of the debug probe. Default is 0x%04x." % DEFAULT_PRODUCT_ID)
        probe_group.add_argument('-s', '--serial',
            help="Serial number of the debug probe.")
        probe_group.add_argument('--frequency', type=convert_frequency,
            help="SWD clock frequency in Hz. Accepts a float or int with optional case-"
                "insensitive K/M suffix and optional Hz. Examples: \"1000\", \"2.5khz\", \"10m\".")
        probe_group.add_argument('--list', action='store_true',
            help="List connected probes and exit.")

        config_group = parser.add_argument_group("configuration")
        config_group.add_argument('--config', metavar="PATH",
            help="Specify YAML configuration file. Defaults to nrfrecover.yaml or nrfrecover.yml "
            "in the current directory.")
        config_group.add_argument('--no-config', action='store_true',
            help="Do not use a configuration file.")
        config_group.add_argument('-O', action='append', dest='options', metavar="OPTION=VALUE",
            help="Set named option.")

        logging_group = parser.add_argument_group("logging")
        logging_group.add_argument('-v', '--verbose', action='count', default=0,
            help="Increase logging level. Can be specified multiple times.")
        logging_group.add_argument('-q', '--quiet', action='count', default=0,
            help="Decrease logging level. Can be specified multiple times.")
        logging_group.add_argument('-L', '--log-level', action='append', metavar="LOGGERS=LEVEL", default=[],
            help="Set log level of loggers whose name matches any of the comma-separated list of glob-style "
            "patterns. Log level must be one of (critical, error, warning, info, debug). Can be "
            "specified multiple times. Example: -Lnrfrecover.recovery.*=debug")
        logging_group.add_argument('--color', choices=("always", "auto", "never"), default=None, nargs='?',
            const="auto", help="Control color logging. Default is auto.")

        return parser

    def _get_log_level_delta(self) -> int:
        """@brief Compute the logging level delta sum from quiet and verbose counts."""
        return (self._args.quiet * 10) - (self._args.verbose * 10)

    def _setup_logging(self) -> None:
        """@brief Configure the logging module.

        The --color argument overrides the `NRFRECOVER_COLOR` environment variable. The quiet and
        verbose counts set the root level, then --log-level settings are applied to individual
        loggers.
        """
        color_setting = self._args.color or os.environ.get('NRFRECOVER_COLOR', 'auto')

        self._use_color = use_color_for(color_setting)

        level = max(1, self.DEFAULT_LOG_LEVEL + self._get_log_level_delta())
        build_color_logger(level=level, use_color=self._use_color)

        for logger_setting in self._args.log_level:
            try:
                loggers, level_name = logger_setting.split('=')[:2]
                level = self.LOG_LEVEL_NAMES[level_name.strip().lower()]
                for logger_pattern in loggers.split(','):
                    pattern = logger_pattern.strip()
                    # Loggers are created lazily, so also set the pattern itself if it is a plain name.
                    names = set(fnmatch.filter(logging.root.manager.loggerDict.keys(), pattern))
                    if not any(c in pattern for c in '*?['):
                        names.add(pattern)
                    LOG.debug('setting log level %s for %s', level_name, sorted(names))
                    for name in names:
                        log = logging.getLogger(name)
                        log.setLevel(level)
                        log.disabled = False
            except (ValueError, KeyError):
                raise exceptions.ConfigurationError(f"invalid --log-level argument '{logger_setting}'")

    def _build_options(self) -> OptionsManager:
        """@brief Stack option layers: command line, then -O settings, then the config file."""
        mgr = OptionsManager()
        mgr.add_back(self._command_line_options())
        mgr.add_back(convert_options(self._args.options))
        mgr.add_back(load_config(self._args.config, no_config=self._args.no_config))
        mgr.add_back({
            # Tracebacks are on by default when debug logging is enabled.
            'debug.traceback': logging.getLogger('nrfrecover').isEnabledFor(logging.DEBUG),
            })
        return mgr

    def _command_line_options(self) -> Dict[str, Any]:
        return {
            'frequency': self._args.frequency,
            'probe.timeout': self._args.timeout,
            'target_override': self._args.target_override,
            'uicr.words': self._args.uicr,
            'unlock.force': self._args.force,
            }

    def _build_selector(self) -> DebugProbeSelector:
        """@brief Probe selector from --probe, or else from the separate ID and serial arguments.
        @exception ConfigurationError An ID is not a number.
        """
        try:
            if self._args.probe is not None:
                return DebugProbeSelector.from_string(self._args.probe)
            return DebugProbeSelector.from_args(self._args.vendor_id, self._args.product_id,
                    self._args.serial)
        except ValueError as err:
            raise exceptions.ConfigurationError("invalid probe selection: %s" % err) from err

    @property
    def _log_tracebacks(self) -> bool:
        if self._options is not None:
            return self._options.get('debug.traceback')
        return logging.getLogger('nrfrecover').isEnabledFor(logging.DEBUG)

    def invoke(self) -> int:
        """@brief Dispatch on the parsed arguments."""
        if self._args.help_options:
            self.show_options_help()
            return 0

        self._options = self._build_options()
        transport = PyOCDProbeTransport()

        if self._args.list:
            self.list_probes(transport)
            return 0

        if self._args.image is None:
            self._parser.error("the IMAGE argument is required")

        run = RecoveryRun(self._args.image, transport, PyOCDImageProgrammer(),
                options=self._options, selector=self._build_selector(),
                output=MilestonePrinter(self._use_color))
        run.run()
        return 0

    def list_probes(self, transport: PyOCDProbeTransport) -> None:
        """@brief Print a table of connected probes."""
        probes = transport.list_probes()
        if not probes:
            print("No available debug probes are connected")
            return

        pt = prettytable.PrettyTable(["#", "VID:PID", "Unique ID", "Description"])
        pt.align = 'l'
        pt.header = True
        pt.border = True
        pt.hrules = prettytable.HEADER
        pt.vrules = prettytable.NONE
        for n, info in enumerate(probes):
            if info.vendor_id is None:
                vidpid = "-"
            else:
                vidpid = "%04x:%04x" % (info.vendor_id, info.product_id)
            pt.add_row([n, vidpid, info.unique_id, info.description])
        print(pt)

    def run(self, args: Optional[Sequence[str]] = None) -> int:
        """@brief Main entry point for command line processing.

        This is the only place errors become a process status. Any failure, including an
        interrupted run, gives a status of 1.
        """
        try:
            self._args = self._parser.parse_args(args)
            self._setup_logging()
            return self.invoke()
        except KeyboardInterrupt:
            LOG.critical("Interrupted; the device may be left erased")
            return 1
        except (exceptions.Error, ValueError) as e:
            LOG.critical(e, exc_info=self._log_tracebacks)
            return 1
        except Exception as e:
            LOG.critical("Error: %s", e, exc_info=self._log_tracebacks)
            return 1

    def show_options_help(self) -> None:
        """@brief Display help for options."""
        for info_name in sorted(options.OPTIONS_INFO.keys()):
            info = options.OPTIONS_INFO[info_name]
            if isinstance(info.type, tuple):
                typename = ", ".join(t.__name__ for t in info.type)
            else:
                typename = info.type.__name__
            print((colorama.Fore.CYAN + colorama.Style.BRIGHT + "{name}" + colorama.Style.RESET_ALL
                + colorama.Fore.GREEN + " ({typename})" + colorama.Style.RESET_ALL
                + " {help}").format(
                name=info.name, typename=typename, help=info.help))

def main():
    sys.exit(RecoverTool().run())

if __name__ == '__main__':
    main()
