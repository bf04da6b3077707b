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
from setuptools import (find_packages, setup)
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent.resolve()
os.chdir(SCRIPT_DIR)

setup(
    name="nrfrecover",
    version="0.1.0",
    description="Recover, reprogram and re-protect nRF91 devices through a CMSIS-DAP probe",
    license="Apache-2.0",
    python_requires=">=3.7",
    packages=find_packages(include=["nrfrecover", "nrfrecover.*"]),
    install_requires=[
        "colorama<1.0",
        "intelhex>=2.0,<3.0",
        "prettytable>=2.0,<4.0",
        "pyocd>=0.34",
        "pyyaml>=6.0,<7.0",
        ],
    extras_require={
        "test": [
            "pytest>=6.2",
            ],
        },
    entry_points={
        "console_scripts": [
            "nrfrecover = nrfrecover.__main__:main",
            ],
        },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Debuggers",
        "Topic :: Software Development :: Embedded Systems",
        ],
    )
