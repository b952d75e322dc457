#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Auxiliary tool string blocks: vendor support, brand project and firmware info.

Vendor support block::

    +-----+------+----------------------------------+
    |Off  | Size | Field                            |
    +-----+------+----------------------------------+
    |0x00 |  2   | Version                          |
    |0x02 |  8   | Reserved                         |
    |0x0A |  1   | Codesign check mode              |
    |0x0B |  4   | Reserved                         |
    |0x0F |  1   | HID ISP support                  |
    |0x10 | 15   | Reserved                         |
    +-----+------+----------------------------------+

"""

import logging
from dataclasses import dataclass
from datetime import datetime

from glhub.exceptions import GlHubValueError
from glhub.utils.fields import Buffer, Field, FieldKind
from glhub.utils.glhub_enum import GlHubEnum
from glhub.utils.structs import FixedStruct
from glhub.utils.verifier import Verifier, VerifierResult

logger = logging.getLogger(__name__)

FW_TIME_FORMAT = "%Y%m%d%H%M"


class VsCodesignCheck(GlHubEnum):
    """Who verifies the codesign of the firmware."""

    UNSUPPORTED = (0x30, "Unsupported", "Codesign check not supported")
    SCALER = (0x31, "Scaler", "Verified by scaler")
    FW = (0x32, "Fw", "Verified by hub firmware")
    MASTER = (0x33, "Master", "Verified by a master hub having scaler or hardware check")
    HW = (0x35, "Hw", "Verified by hardware")


class VsHidIsp(GlHubEnum):
    """In-system programming over HID capability."""

    UNSUPPORTED = (0x30, "Unsupported", "HID ISP not supported")
    SUPPORT = (0x31, "Support", "HID ISP supported")
    CODESIGN_N_RESET = (
        0x32,
        "CodesignNReset",
        "HID ISP of codesigned bank 2 firmware without reset supported",
    )


@dataclass(frozen=True, repr=False)
class TsVendorSupport(FixedStruct):
    """Vendor support block of the tool string."""

    NAME = "Tool string vendor support block"
    FIELDS = (
        Field("version", 2, FieldKind.CHARS),
        Field("reserved1", 8, FieldKind.CHARS),
        Field("codesign_check", 1, FieldKind.ENUM, enum=VsCodesignCheck),
        Field("reserved2", 4, FieldKind.CHARS),
        Field("hid_isp", 1, FieldKind.ENUM, enum=VsHidIsp),
        Field("reserved3", 15, FieldKind.CHARS),
    )

    version: str = "00"
    reserved1: str = "0" * 8
    codesign_check: VsCodesignCheck = VsCodesignCheck.UNSUPPORTED
    reserved2: str = "0" * 4
    hid_isp: VsHidIsp = VsHidIsp.UNSUPPORTED
    reserved3: str = "0" * 15

    @property
    def codesign_supported(self) -> bool:
        """True when any codesign verification takes place."""
        return self.codesign_check != VsCodesignCheck.UNSUPPORTED

    @property
    def hid_isp_supported(self) -> bool:
        """True when firmware can be programmed over HID."""
        return self.hid_isp != VsHidIsp.UNSUPPORTED


@dataclass(frozen=True, repr=False)
class TsBrandProject(FixedStruct):
    """Brand project block of the tool string."""

    NAME = "Tool string brand project block"
    FIELDS = (Field("project", 15, FieldKind.CHARS),)

    project: str = " " * 15


@dataclass(frozen=True, repr=False)
class TsFirmwareInfo(FixedStruct):
    """Firmware information block: ISP tool version, address mode, build/update time."""

    NAME = "Tool string firmware info block"
    FIELDS = (
        Field("tool_version", 6),
        Field("address_mode", 1, FieldKind.UINT),
        Field("build_fw_time", 12, FieldKind.CHARS),
        Field("update_fw_time", 12, FieldKind.CHARS),
    )
    ADDRESS_MODES = (3, 4)

    tool_version: bytes = bytes(6)
    address_mode: int = 3
    build_fw_time: str = "000000000000"
    update_fw_time: str = "000000000000"

    @staticmethod
    def _parse_time(name: str, value: str) -> datetime:
        try:
            return datetime.strptime(value, FW_TIME_FORMAT)
        except ValueError as exc:
            raise GlHubValueError(f"Invalid {name} '{value}', expected YYYYMMDDhhmm") from exc

    @property
    def build_time(self) -> datetime:
        """Firmware build time."""
        return self._parse_time("build_fw_time", self.build_fw_time)

    @property
    def update_time(self) -> datetime:
        """Firmware update time."""
        return self._parse_time("update_fw_time", self.update_fw_time)

    def verify(self) -> Verifier:
        """Get verification report of the block.

        Besides the field checks, the address mode and both timestamps are checked.

        :return: Verifier of the block.
        """
        ret = super().verify()
        if self.address_mode in self.ADDRESS_MODES:
            ret.add_record("Address mode", VerifierResult.SUCCEEDED, f"{self.address_mode} bytes")
        else:
            ret.add_record(
                "Address mode",
                VerifierResult.WARNING,
                f"{self.address_mode} has no meaning, expected one of {self.ADDRESS_MODES}",
            )
        for name in ("build_time", "update_time"):
            try:
                ret.add_record(name, VerifierResult.SUCCEEDED, str(getattr(self, name)))
            except GlHubValueError as exc:
                ret.add_record(name, VerifierResult.WARNING, exc.description)
        return ret


def decode_vendor_support(data: Buffer, offset: int = 0) -> TsVendorSupport:
    """Decode tool string vendor support block.

    :param data: Source buffer.
    :param offset: Offset of the block.
    :raises GlHubUnknownDiscriminator: Unknown codesign check or HID ISP value.
    :return: Decoded block.
    """
    ret = TsVendorSupport.parse(data, offset)
    logger.debug(
        f"Vendor support: codesign check {ret.codesign_check.label}, HID ISP {ret.hid_isp.label}"
    )
    return ret


def decode_brand_project(data: Buffer, offset: int = 0) -> TsBrandProject:
    """Decode tool string brand project block.

    :param data: Source buffer.
    :param offset: Offset of the block.
    :return: Decoded block.
    """
    return TsBrandProject.parse(data, offset)


def decode_firmware_info(data: Buffer, offset: int = 0) -> TsFirmwareInfo:
    """Decode tool string firmware info block.

    :param data: Source buffer.
    :param offset: Offset of the block.
    :return: Decoded block.
    """
    return TsFirmwareInfo.parse(data, offset)
