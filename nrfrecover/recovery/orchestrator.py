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
from typing import (Callable, List, Optional, Tuple, Type)

from ..core import exceptions
from ..core.options_manager import OptionsManager
from ..core.target_session import (Permissions, TargetSession)
from ..family import get_family
from ..family.base import TargetFamily
from ..flash.programmer import (ImageInfo, ImageProgrammer, validate_image)
from ..probe.acquire import acquire_probe
from ..probe.debug_probe import (Probe, ProbeTransport)
from ..probe.selector import DebugProbeSelector
from ..utility.cmdline import convert_word_settings
from ..utility.sequencer import StageSequence
from .protection import ProtectionWriter
from .unlock import DeviceUnlocker

LOG = logging.getLogger(__name__)

class RecoveryRun(object):
    """@brief One end-to-end recovery of a device.

    Stages run in order and the first failure stops the run with a StageError naming the stage.
    Work already done, such as the mass erase, is not undone. The target session, once created,
    is closed whether or not the run succeeds.

    Milestones are reported through the _output_ callable, which defaults to print().
    """

    def __init__(self,
            image_path: str,
            transport: ProbeTransport,
            programmer: ImageProgrammer,
            options: Optional[OptionsManager] = None,
            selector: Optional[DebugProbeSelector] = None,
            output: Callable[[str], None] = print,
            ) -> None:
        self._image_path = image_path
        self._transport = transport
        self._programmer = programmer
        self._options = options if (options is not None) else OptionsManager()
        self._selector = selector if (selector is not None) else DebugProbeSelector()
        self._output = output

        self._family: Optional[Type[TargetFamily]] = None
        self._image: Optional[ImageInfo] = None
        self._words: List[Tuple[int, int]] = []
        self._probe: Optional[Probe] = None
        self._session: Optional[TargetSession] = None

    @property
    def image(self) -> Optional[ImageInfo]:
        return self._image

    @property
    def protection_words(self) -> List[Tuple[int, int]]:
        return self._words

    def create_sequence(self) -> StageSequence:
        """@brief Build the stage sequence for the run."""
        return StageSequence(
            ('check configuration', self._check_configuration),
            ('acquire probe',       self._acquire_probe),
            ('unlock',              self._unlock),
            ('attach',              self._attach),
            ('program',             self._program),
            ('protect',             self._protect),
            ('reset',               self._reset),
            )

    def run(self) -> None:
        """@brief Run every stage.
        @exception StageError The named stage failed.
        """
        sequence = self.create_sequence()
        LOG.debug("Recovery stages: %r", sequence)
        try:
            sequence.invoke()
        finally:
            self._close_session()
        self._output("Done!")

    def _close_session(self) -> None:
        if self._session is None:
            return
        session, self._session = self._session, None
        try:
            session.close()
        except exceptions.Error as err:
            LOG.error("Error closing session: %s", err)

    def _check_configuration(self) -> None:
        self._family = get_family(self._options.get('family'))
        self._image = validate_image(self._image_path, self._options.get('image.format'))

        words = self._options.get('uicr.words')
        if words is None:
            self._words = list(self._family.PROTECTION_WORDS)
        else:
            try:
                self._words = convert_word_settings(words)
            except ValueError as err:
                raise exceptions.ConfigurationError(str(err)) from err
        for addr, value in self._words:
            LOG.debug("Protection word 0x%08x = 0x%08x", addr, value)

    def _acquire_probe(self) -> None:
        self._probe = acquire_probe(self._transport, self._selector,
                self._options.get('probe.timeout'), self._options.get('probe.retry_interval'))
        self._output("Got probe %s" % self._probe.unique_id)

        frequency = self._options.get('frequency')
        try:
            self._probe.set_speed(frequency)
        except exceptions.ProbeError as err:
            LOG.warning("Unable to set SWD frequency to %d Hz: %s", frequency, err)

    def _unlock(self) -> None:
        assert (self._probe is not None) and (self._family is not None)
        unlocker = DeviceUnlocker(self._family, self._options)
        self._probe = unlocker.unlock(self._probe, self._options.get('unlock.force'))
        if unlocker.did_erase:
            self._output("Unlocked device!")
        else:
            self._output("Device already unlocked!")

    def _attach(self) -> None:
        assert (self._probe is not None) and (self._family is not None)
        target_name = self._options.get('target_override') or self._family.TARGET_NAME
        self._session = self._probe.attach_named_target(target_name, Permissions())
        self._output("Created session for %s!" % target_name)

    def _program(self) -> None:
        assert (self._session is not None) and (self._image is not None)
        self._programmer.download(self._session, self._image_path,
                self._image.format, self._options.get('image.preverify'))
        self._output("Done flashing!")

    def _protect(self) -> None:
        assert (self._session is not None) and (self._family is not None)
        writer = ProtectionWriter(self._family, self._options)
        writer.write_words(self._session.core(0), self._words)
        if self._words:
            self._output("Wrote %d protection word(s)" % len(self._words))

    def _reset(self) -> None:
        assert self._session is not None
        self._session.core(0).reset()
