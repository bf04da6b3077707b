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
from typing import (NamedTuple, Optional)
from intelhex import (IntelHex, IntelHexError)

from ..core import exceptions
from ..core.target_session import TargetSession

LOG = logging.getLogger(__name__)

## Image formats the programmer accepts, mapped from `image.format` values.
IMAGE_FORMATS = {
    'hex': 'hex',
    'ihex': 'hex',
    'bin': 'bin',
    'elf': 'elf',
    'axf': 'elf',
    }

class ImageInfo(NamedTuple):
    """@brief Summary of a validated image file.

    _start_ and _end_ are the lowest and highest address with data, inclusive. They are None for
    formats without load addresses.
    """
    path: str
    format: str
    size: int
    start: Optional[int] = None
    end: Optional[int] = None

    def __str__(self) -> str:
        if self.start is None:
            return "%s (%s, %d bytes)" % (self.path, self.format, self.size)
        return "%s (%s, %d bytes @ 0x%08x-0x%08x)" % (self.path, self.format, self.size,
                self.start, self.end)

def validate_image(path: str, image_format: str = 'hex') -> ImageInfo:
    """@brief Check that the image file exists and, for Intel HEX, that it parses.

    @exception ConfigurationError The file is missing, empty, of an unknown format, or not valid
        Intel HEX.
    """
    fmt = IMAGE_FORMATS.get(image_format.lower())
    if fmt is None:
        raise exceptions.ConfigurationError("unsupported image format '%s'" % image_format)
    if not os.path.isfile(path):
        raise exceptions.ConfigurationError("file not found: %s" % path)

    if fmt != 'hex':
        size = os.path.getsize(path)
        if size == 0:
            raise exceptions.ConfigurationError("image file %s is empty" % path)
        info = ImageInfo(path, fmt, size)
    else:
        try:
            ihex = IntelHex(path)
        except (IntelHexError, ValueError) as err:
            raise exceptions.ConfigurationError("%s is not a valid Intel HEX file: %s" % (path, err)) from err
        if len(ihex) == 0:
            raise exceptions.ConfigurationError("image file %s has no data" % path)
        info = ImageInfo(path, fmt, len(ihex), ihex.minaddr(), ihex.maxaddr())

    LOG.info("Image: %s", info)
    return info

class ImageProgrammer(object):
    """@brief Writes an image file into the flash of an attached target."""

    def download(self, session: TargetSession, path: str, image_format: str = 'hex',
            preverify: bool = True) -> None:
        """@brief Program the image at _path_.

        @param session Attached target session.
        @param path Image file path.
        @param image_format One of the IMAGE_FORMATS values.
        @param preverify Compare flash contents first and skip pages that already match.
        @exception ProgrammingError
        """
        raise NotImplementedError()
