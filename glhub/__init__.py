#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB - decoder of USB hub firmware images and their tool string metadata.

The package turns raw bytes read from a hub (or from a firmware file) into typed,
immutable records:

    - firmware class headers (hub, device bridge, power delivery)
    - tool string descriptor blocks (static, per-model dynamic, vendor support, ...)
    - codesign information blocks (RSA and ECDSA) and public keys

Every decoder works on a caller-owned buffer and raises a typed exception from
:mod:`glhub.exceptions` when the data do not match the expected layout.
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse

from glhub.__version__ import __version__ as glhub_version


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


version: Version = parse(glhub_version)

__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = str(version)

GLHUB_VERSION_BASE = version.base_version
GLHUB_VERSION_FOLDER_SUFFIX = GLHUB_VERSION_BASE.replace(".", "_")

# GLHUB_DEBUG might be redefined by GLHUB_DEBUG_{version} env variable, default is False
GLHUB_DEBUG = value_to_bool(os.environ.get("GLHUB_DEBUG"))
GLHUB_DEBUG |= value_to_bool(os.environ.get(f"GLHUB_DEBUG_{GLHUB_VERSION_FOLDER_SUFFIX}"))

GLHUB_YML_INDENT = int(os.environ.get("GLHUB_YML_INDENT", "2"))
