#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Firmware class headers.

Every firmware image (or sub-image) carried by the hub starts with a 256 bytes header
whose last four bytes tell what kind of firmware follows::

    +-------+---------------------------------------------+
    |Off    | Field                                       |
    +-------+---------------------------------------------+
    |0x000  | Reserved (252 bytes)                        |
    +-------+---------------------------------------------+
    |0x0FC  | Magic: 'XROM' hub / 'HOST' dev / 'PRDY' PD  |
    +-------+---------------------------------------------+

"""

import logging
from dataclasses import dataclass
from typing import Union

from glhub.exceptions import GlHubUnrecognizedFirmwareClass
from glhub.utils.fields import Buffer, Field, FieldKind, check_bounds
from glhub.utils.glhub_enum import GlHubEnum
from glhub.utils.structs import FixedStruct

logger = logging.getLogger(__name__)

FIRMWARE_HEADER_SIZE = 256
FIRMWARE_HEADER_RESERVED_SIZE = 252


class FirmwareType(GlHubEnum):
    """Logical role of a firmware image or sub-image."""

    HUB = (0, "Hub", "Hub firmware")
    DEV_BRIDGE = (1, "DevBridge", "Device bridge firmware")
    PD = (2, "Pd", "Power delivery firmware")
    CODESIGN = (3, "Codesign", "Codesign information")
    SCALER = (5, "Scaler", "Scaler firmware (vendor support)")
    UNKNOWN = (0xFF, "Unknown", "Unknown firmware")


# Number of firmware types living inside the hub (HUB .. CODESIGN)
INSIDE_HUB_COUNT = 4


class FirmwareClassHeader(FixedStruct):
    """Common part of the firmware class headers.

    :cvar MAGIC: Magic tag closing the header.
    :cvar FIRMWARE_TYPE: Firmware type identified by the magic.
    """

    CONSTANT_ERROR = GlHubUnrecognizedFirmwareClass
    MAGIC = b""
    FIRMWARE_TYPE = FirmwareType.UNKNOWN

    @property
    def firmware_type(self) -> FirmwareType:
        """Firmware type identified by the header."""
        return self.FIRMWARE_TYPE


def _header_fields(magic: bytes) -> tuple[Field, ...]:
    return (
        Field("reserved", FIRMWARE_HEADER_RESERVED_SIZE),
        Field("magic", 4, FieldKind.CHARS, constant=magic),
    )


@dataclass(frozen=True, repr=False)
class FirmwareHdr(FirmwareClassHeader):
    """Hub firmware header (magic ``XROM``)."""

    NAME = "Hub firmware header"
    MAGIC = b"XROM"
    FIRMWARE_TYPE = FirmwareType.HUB
    FIELDS = _header_fields(MAGIC)

    reserved: bytes = bytes(FIRMWARE_HEADER_RESERVED_SIZE)
    magic: str = "XROM"


@dataclass(frozen=True, repr=False)
class DevFirmwareHdr(FirmwareClassHeader):
    """Device bridge firmware header (magic ``HOST``)."""

    NAME = "Device bridge firmware header"
    MAGIC = b"HOST"
    FIRMWARE_TYPE = FirmwareType.DEV_BRIDGE
    FIELDS = _header_fields(MAGIC)

    reserved: bytes = bytes(FIRMWARE_HEADER_RESERVED_SIZE)
    magic: str = "HOST"


@dataclass(frozen=True, repr=False)
class PdFirmwareHdr(FirmwareClassHeader):
    """Power delivery firmware header (magic ``PRDY``)."""

    NAME = "Power delivery firmware header"
    MAGIC = b"PRDY"
    FIRMWARE_TYPE = FirmwareType.PD
    FIELDS = _header_fields(MAGIC)

    reserved: bytes = bytes(FIRMWARE_HEADER_RESERVED_SIZE)
    magic: str = "PRDY"


# Classification order, a buffer may satisfy only one of them
FIRMWARE_CLASS_HEADERS: tuple[type[FirmwareClassHeader], ...] = (
    FirmwareHdr,
    DevFirmwareHdr,
    PdFirmwareHdr,
)

AnyFirmwareHdr = Union[FirmwareHdr, DevFirmwareHdr, PdFirmwareHdr]


def decode_firmware_class(data: Buffer, offset: int = 0) -> AnyFirmwareHdr:
    """Classify the firmware by its class header.

    The hub, device bridge and power delivery headers are tried in this order.

    :param data: Source buffer.
    :param offset: Offset of the header in the buffer.
    :raises GlHubBufferTooShort: Fewer than 256 bytes available at the offset.
    :raises GlHubUnrecognizedFirmwareClass: No known magic found.
    :return: Decoded header of the matching class.
    """
    check_bounds(data, offset, FIRMWARE_HEADER_SIZE, "firmware class header")
    for header_cls in FIRMWARE_CLASS_HEADERS:
        try:
            header = header_cls.parse(data, offset)
        except GlHubUnrecognizedFirmwareClass:
            continue
        logger.debug(f"Firmware classified as {header.firmware_type.label} at offset {offset}")
        return header  # type: ignore[return-value]

    actual = bytes(data[offset + FIRMWARE_HEADER_RESERVED_SIZE : offset + FIRMWARE_HEADER_SIZE])
    raise GlHubUnrecognizedFirmwareClass(
        "magic", b"|".join(header_cls.MAGIC for header_cls in FIRMWARE_CLASS_HEADERS), actual
    )


def get_firmware_type(data: Buffer, offset: int = 0) -> FirmwareType:
    """Get firmware type of the buffer.

    :param data: Source buffer.
    :param offset: Offset of the header in the buffer.
    :raises GlHubBufferTooShort: Fewer than 256 bytes available at the offset.
    :return: Firmware type, ``FirmwareType.UNKNOWN`` if no class header matches.
    """
    try:
        return decode_firmware_class(data, offset).firmware_type
    except GlHubUnrecognizedFirmwareClass:
        logger.debug(f"No firmware class header found at offset {offset}")
        return FirmwareType.UNKNOWN
