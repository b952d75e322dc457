#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB firmware image and tool string decoders.

This package decodes firmware class headers, tool string descriptor blocks and
codesign information blocks of Genesys Logic USB hubs.
"""

from glhub.image.codesign import (
    decode_codesign,
    decode_codesign_ecdsa,
    decode_codesign_rsa,
    decode_ecdsa_public_key,
    decode_rsa_public_key,
)
from glhub.image.header import decode_firmware_class, get_firmware_type
from glhub.image.tool_string import decode_dynamic, decode_static
from glhub.image.vendor_support import (
    decode_brand_project,
    decode_firmware_info,
    decode_vendor_support,
)

__all__ = [
    "decode_brand_project",
    "decode_codesign",
    "decode_codesign_ecdsa",
    "decode_codesign_rsa",
    "decode_dynamic",
    "decode_ecdsa_public_key",
    "decode_firmware_class",
    "decode_firmware_info",
    "decode_rsa_public_key",
    "decode_static",
    "decode_vendor_support",
    "get_firmware_type",
]
