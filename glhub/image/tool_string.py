#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tool string descriptor blocks.

The hub reports its identity in a "tool string" descriptor made of a version
independent static block followed by a dynamic block whose layout depends on the hub
model and on the tool string version (first byte of the static block).

Static block::

    +-----+------+---------------------------------------------+
    |Off  | Size | Field                                       |
    +-----+------+---------------------------------------------+
    |0x00 |  1   | Tool string version ('0' .. '8')            |
    |0x01 |  4   | Mask project code                           |
    |0x05 |  1   | Mask project hardware ('0' = a, '1' = b...) |
    |0x06 |  2   | Mask project firmware ('01', '02', ...)     |
    |0x08 |  6   | Mask project IC type ('352310' = GL3523-10) |
    |0x0E |  4   | Running project code                        |
    |0x12 |  1   | Running project hardware                    |
    |0x13 |  2   | Running project firmware                    |
    |0x15 |  6   | Running project IC type                     |
    |0x1B |  4   | Firmware version ('MMmm' = MM.mm)           |
    +-----+------+---------------------------------------------+

Dynamic blocks share nine one-character fields (running mode, SS/HS port numbers,
SS/HS/FS/LS connection status, charging and non-removable port bit fields) and differ
in what follows them, see :data:`DYNAMIC_LAYOUTS`.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from typing_extensions import Self

from glhub.exceptions import (
    GlHubUnknownDiscriminator,
    GlHubUnsupportedVariant,
    GlHubValueError,
)
from glhub.utils.config import Config
from glhub.utils.fields import Buffer, Field, FieldKind, check_bounds, read_enum
from glhub.utils.glhub_enum import GlHubEnum
from glhub.utils.misc import Endianness
from glhub.utils.structs import FixedStruct

logger = logging.getLogger(__name__)


class TsVersion(GlHubEnum):
    """Tool string version, selects the layout of the dynamic block."""

    DYNAMIC_9BYTE = (0x30, "Dynamic9Byte", "Dynamic block of 9 bytes")
    BONDING = (0x31, "Bonding", "Dynamic block with bonding")
    BONDING_QC = (0x32, "BondingQc", "Bonding with QC bit")
    VENDOR_SUPPORT = (0x33, "VendorSupport", "Vendor support block available")
    MULTI_TOKEN = (0x34, "MultiToken", "Multi token transfer reported")
    DYNAMIC_2ND = (0x35, "Dynamic2nd", "Second generation dynamic block")
    RESERVED = (0x36, "Reserved", "Reserved")
    DYNAMIC_13BYTE = (0x37, "Dynamic13Byte", "Dynamic block with firmware bank status")
    BRAND_PROJECT = (0x38, "BrandProject", "Brand project block available")

    @property
    def number(self) -> int:
        """Numeric tool string version (0 for '0', 1 for '1', ...)."""
        return self.tag - TsVersion.DYNAMIC_9BYTE.tag


class FwStatus(GlHubEnum):
    """Flash region the firmware currently runs from."""

    MASK = (0x30, "Mask", "Mask code")
    BANK1 = (0x31, "Bank1", "Flash bank 1")
    BANK2 = (0x32, "Bank2", "Flash bank 2")


class HubModel(GlHubEnum):
    """Hub model, supplied by the caller (it is not stored in the dynamic block)."""

    GL3523 = (0x3523, "GL3523")
    GL3590 = (0x3590, "GL3590")
    GL3525 = (0x3525, "GL3525")


def _chars(name: str, size: int = 1) -> Field:
    return Field(name, size, FieldKind.CHARS)


########################################################################################################################
# Static block
########################################################################################################################
@dataclass(frozen=True, repr=False)
class TsStatic(FixedStruct):
    """Version independent part of the tool string."""

    NAME = "Tool string static block"
    FIELDS = (
        Field("tool_string_version", 1, FieldKind.ENUM, enum=TsVersion),
        _chars("mask_project_code", 4),
        _chars("mask_project_hardware"),
        _chars("mask_project_firmware", 2),
        _chars("mask_project_ic_type", 6),
        _chars("running_project_code", 4),
        _chars("running_project_hardware"),
        _chars("running_project_firmware", 2),
        _chars("running_project_ic_type", 6),
        _chars("firmware_version", 4),
    )

    tool_string_version: TsVersion = TsVersion.DYNAMIC_9BYTE
    mask_project_code: str = "0000"
    mask_project_hardware: str = "0"
    mask_project_firmware: str = "00"
    mask_project_ic_type: str = "000000"
    running_project_code: str = "0000"
    running_project_hardware: str = "0"
    running_project_firmware: str = "00"
    running_project_ic_type: str = "000000"
    firmware_version: str = "0000"

    @classmethod
    def parse(cls, data: Buffer, offset: int = 0) -> Self:
        """Parse the static block.

        The version byte is decoded first, an unknown version is reported even when
        the rest of the block is missing.

        :param data: Source buffer.
        :param offset: Offset of the block.
        :raises GlHubUnknownDiscriminator: Unknown tool string version.
        :raises GlHubBufferTooShort: The buffer does not hold the whole block.
        :return: Decoded static block.
        """
        check_bounds(data, offset, 1, "tool_string_version")
        version = read_enum(data, offset, TsVersion, "tool_string_version")
        logger.debug(f"Tool string version: {version.label}")
        return super().parse(data, offset)

    @staticmethod
    def ic_type_name(ic_type: str) -> str:
        """Get IC name from the IC type field.

        :param ic_type: IC type field, e.g. '352310'.
        :raises GlHubValueError: The field is not made of six digits.
        :return: IC name, e.g. 'GL3523-10'.
        """
        if len(ic_type) != 6 or not all("0" <= ch <= "9" for ch in ic_type):
            raise GlHubValueError(f"Invalid IC type: {ic_type!r}")
        return f"GL{ic_type[:4]}-{ic_type[4:]}"

    @staticmethod
    def hardware_revision(hardware: str) -> str:
        """Get hardware revision letter ('0' is 'a', '1' is 'b', ...).

        :param hardware: Project hardware field.
        :raises GlHubValueError: The field is not a digit.
        :return: Revision letter.
        """
        if len(hardware) != 1 or not "0" <= hardware <= "9":
            raise GlHubValueError(f"Invalid project hardware: {hardware!r}")
        return chr(ord("a") + int(hardware))

    @property
    def mask_ic_name(self) -> str:
        """IC name of the mask code."""
        return self.ic_type_name(self.mask_project_ic_type)

    @property
    def running_ic_name(self) -> str:
        """IC name of the running code."""
        return self.ic_type_name(self.running_project_ic_type)

    @property
    def firmware_version_text(self) -> str:
        """Firmware version in 'MM.mm' format."""
        return f"{self.firmware_version[:2]}.{self.firmware_version[2:]}"


def decode_static(data: Buffer, offset: int = 0) -> TsStatic:
    """Decode tool string static block.

    :param data: Source buffer.
    :param offset: Offset of the block.
    :return: Decoded static block.
    """
    return TsStatic.parse(data, offset)


########################################################################################################################
# Dynamic blocks
########################################################################################################################
@dataclass(frozen=True, repr=False)
class TsDynamicBase(FixedStruct):
    """Fields shared by all dynamic blocks.

    Connection status, charging and non-removable port fields are bit fields
    written as a hexadecimal digit, bit 0 stands for port 1.
    """

    NAME = "Tool string dynamic block"
    FIELDS = (
        # 'M' for mask code, the others for bank code
        _chars("running_mode"),
        _chars("ss_port_number"),
        _chars("hs_port_number"),
        _chars("ss_connection_status"),
        _chars("hs_connection_status"),
        _chars("fs_connection_status"),
        _chars("ls_connection_status"),
        _chars("charging"),
        _chars("non_removable_port_status"),
    )

    running_mode: str = "M"
    ss_port_number: str = "0"
    hs_port_number: str = "0"
    ss_connection_status: str = "0"
    hs_connection_status: str = "0"
    fs_connection_status: str = "0"
    ls_connection_status: str = "0"
    charging: str = "0"
    non_removable_port_status: str = "0"

    @property
    def running_mask_code(self) -> bool:
        """True when the hub runs the mask code."""
        return self.running_mode == "M"

    def get_bitfield(self, name: str) -> int:
        """Get value of one of the single character bit fields.

        :param name: Field name, e.g. 'charging'.
        :raises GlHubValueError: The character is not a hexadecimal digit.
        :return: Bit field value.
        """
        value = getattr(self, self.get_field(name).name)
        try:
            return int(value, 16)
        except ValueError as exc:
            raise GlHubValueError(f"Field {name} is not a hexadecimal digit: {value!r}") from exc

    def get_ports(self, name: str) -> list[int]:
        """Get list of ports (numbered from 1) whose bit is set in the bit field.

        :param name: Field name, e.g. 'ss_connection_status'.
        :return: Sorted port numbers.
        """
        value = self.get_bitfield(name)
        return [bit + 1 for bit in range(4) if value & (1 << bit)]

    @property
    def ss_port_count(self) -> int:
        """Number of super-speed ports."""
        return self.get_bitfield("ss_port_number")

    @property
    def hs_port_count(self) -> int:
        """Number of high-speed ports."""
        return self.get_bitfield("hs_port_number")


@dataclass(frozen=True, repr=False)
class TsDynamic9Byte(TsDynamicBase):
    """Dynamic block of tool string version 0: nine characters, no bonding."""

    NAME = "Tool string dynamic block (9 bytes)"


# Numeric tool string versions whose GL3523 bonding bit layout is known
_BONDING_BIT_VERSIONS = (1, 2, 3, 4, 5, 7, 8)
# Bonding character of each value, upper case only
BONDING_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUV"


@dataclass(frozen=True)
class Gl3523Bonding:
    """Decoded GL3523 bonding register.

    Tool string version 1::

        Bit3 : Flash dump location
        Bit2 : Type-C
        Bit1 : MTT / STT
        Bit0 : 2 / 4 ports

    Tool string version 2 or newer::

        Bit4 : Flash dump location
        Bit3 : Type-C
        Bit2 : MTT / STT
        Bit1 : 2 / 4 ports
        Bit0 : QC

    The character is '0'..'F'; bit 4 overflows into 'G'..'V'.
    """

    value: int
    four_ports: bool
    multi_token: bool
    type_c_disabled: bool
    qc_disabled: Optional[bool]
    flash_dump_bank1: bool

    @classmethod
    def decode(cls, bonding: str, version: int) -> Self:
        """Decode bonding character.

        :param bonding: Raw bonding character.
        :param version: Numeric tool string version that produced the character.
        :raises GlHubUnsupportedVariant: Version without bonding (0), reserved (6) or unknown.
        :raises GlHubUnknownDiscriminator: Character outside of the encoding range.
        :return: Decoded bonding.
        """
        if version not in _BONDING_BIT_VERSIONS:
            raise GlHubUnsupportedVariant("GL3523 bonding", version)
        max_value = 0x0F if version == 1 else 0x1F
        if not isinstance(bonding, str) or len(bonding) != 1 or bonding not in BONDING_CHARS:
            raise GlHubUnknownDiscriminator(cls.__name__, bonding, "bonding")
        value = BONDING_CHARS.index(bonding)
        if value > max_value:
            raise GlHubUnknownDiscriminator(cls.__name__, bonding, "bonding")

        if version == 1:
            return cls(
                value=value,
                four_ports=bool(value & 0x01),
                multi_token=bool(value & 0x02),
                type_c_disabled=bool(value & 0x04),
                qc_disabled=None,
                flash_dump_bank1=bool(value & 0x08),
            )
        return cls(
            value=value,
            qc_disabled=bool(value & 0x01),
            four_ports=bool(value & 0x02),
            multi_token=bool(value & 0x04),
            type_c_disabled=bool(value & 0x08),
            flash_dump_bank1=bool(value & 0x10),
        )


@dataclass(frozen=True, repr=False)
class TsDynamicGl3523(TsDynamicBase):
    """GL3523 dynamic block: common fields and a bonding character.

    The record remembers the tool string version it was decoded for, because the
    bonding bits depend on it.
    """

    NAME = "Tool string dynamic block (GL3523)"
    FIELDS = TsDynamicBase.FIELDS + (_chars("bonding"),)

    bonding: str = "0"
    tool_string_version: TsVersion = TsVersion.BONDING

    @classmethod
    def parse(
        cls, data: Buffer, offset: int = 0, version: TsVersion = TsVersion.BONDING
    ) -> Self:
        """Parse the block.

        :param data: Source buffer.
        :param offset: Offset of the block.
        :param version: Tool string version the block has been produced with.
        :return: Decoded block.
        """
        return cls(**cls._parse_fields(data, offset), tool_string_version=version)

    @property
    def bonding_bits(self) -> Gl3523Bonding:
        """Bit field view of the bonding character."""
        return Gl3523Bonding.decode(self.bonding, self.tool_string_version.number)

    def get_config(self) -> Config:
        """Get configuration describing the record.

        :return: Configuration dictionary.
        """
        ret = super().get_config()
        ret["tool_string_version"] = self.tool_string_version.label
        return ret

    @classmethod
    def _config_to_fields(cls, config: Config) -> dict:
        ret = super()._config_to_fields(config)
        ret["tool_string_version"] = TsVersion.from_attr(config.get_str("tool_string_version"))
        return ret


@dataclass(frozen=True, repr=False)
class TsDynamicGl3590(TsDynamicBase):
    """GL3590 dynamic block: common fields and a bonding byte.

    Bonding bit 7 is the flash dump location (0 bank 0, 1 bank 1).
    """

    NAME = "Tool string dynamic block (GL3590)"
    FIELDS = TsDynamicBase.FIELDS + (Field("bonding", 1, FieldKind.UINT),)

    bonding: int = 0

    @property
    def flash_dump_bank1(self) -> bool:
        """True when the flash dump location is bank 1."""
        return bool(self.bonding & 0x80)


@dataclass(frozen=True, repr=False)
class TsDynamicGl359030(TsDynamicGl3590):
    """GL3590 dynamic block with hub and device bridge firmware bank status."""

    NAME = "Tool string dynamic block (GL3590 with bank status)"
    FIELDS = TsDynamicGl3590.FIELDS + (
        Field("hub_fw_status", 1, FieldKind.ENUM, enum=FwStatus),
        Field("dev_fw_status", 1, FieldKind.ENUM, enum=FwStatus),
        Field("dev_fw_version", 2, FieldKind.UINT, Endianness.LITTLE),
    )

    hub_fw_status: FwStatus = FwStatus.MASK
    dev_fw_status: FwStatus = FwStatus.MASK
    dev_fw_version: int = 0


@dataclass(frozen=True, repr=False)
class TsDynamicGl3525(TsDynamicGl3590):
    """GL3525 dynamic block with hub, power delivery and device bridge bank status."""

    NAME = "Tool string dynamic block (GL3525)"
    FIELDS = TsDynamicGl3590.FIELDS + (
        Field("hub_fw_status", 1, FieldKind.ENUM, enum=FwStatus),
        Field("pd_fw_status", 1, FieldKind.ENUM, enum=FwStatus),
        Field("pd_fw_version", 2, FieldKind.UINT, Endianness.LITTLE),
        Field("dev_fw_status", 1, FieldKind.ENUM, enum=FwStatus),
        Field("dev_fw_version", 2, FieldKind.UINT, Endianness.LITTLE),
    )

    hub_fw_status: FwStatus = FwStatus.MASK
    pd_fw_status: FwStatus = FwStatus.MASK
    pd_fw_version: int = 0
    dev_fw_status: FwStatus = FwStatus.MASK
    dev_fw_version: int = 0


AnyTsDynamic = Union[
    TsDynamic9Byte, TsDynamicGl3523, TsDynamicGl3590, TsDynamicGl359030, TsDynamicGl3525
]

_BONDING_VERSIONS = (
    TsVersion.BONDING,
    TsVersion.BONDING_QC,
    TsVersion.VENDOR_SUPPORT,
    TsVersion.MULTI_TOKEN,
    TsVersion.DYNAMIC_2ND,
)
_BANK_VERSIONS = (TsVersion.DYNAMIC_13BYTE, TsVersion.BRAND_PROJECT)

DYNAMIC_LAYOUTS: dict[HubModel, dict[TsVersion, type[TsDynamicBase]]] = {
    HubModel.GL3523: {
        TsVersion.DYNAMIC_9BYTE: TsDynamic9Byte,
        **{version: TsDynamicGl3523 for version in _BONDING_VERSIONS + _BANK_VERSIONS},
    },
    HubModel.GL3590: {
        TsVersion.DYNAMIC_9BYTE: TsDynamic9Byte,
        **{version: TsDynamicGl3590 for version in _BONDING_VERSIONS},
        **{version: TsDynamicGl359030 for version in _BANK_VERSIONS},
    },
    HubModel.GL3525: {version: TsDynamicGl3525 for version in _BANK_VERSIONS},
}


def get_dynamic_layout(
    model: HubModel, version: Union[TsVersion, int]
) -> type[TsDynamicBase]:
    """Get dynamic block class for the model and tool string version.

    :param model: Hub model.
    :param version: Tool string version (member or its byte value).
    :raises GlHubUnknownDiscriminator: Unknown tool string version byte or foreign member.
    :raises GlHubUnsupportedVariant: No layout for the combination.
    :return: Dynamic block class.
    """
    version = TsVersion.decode(version, "tool_string_version")
    layouts = DYNAMIC_LAYOUTS.get(model) if isinstance(model, HubModel) else None
    if layouts is None or version not in layouts:
        raise GlHubUnsupportedVariant(model, version)
    return layouts[version]


def decode_dynamic(
    data: Buffer, model: HubModel, version: Union[TsVersion, int], offset: int = 0
) -> AnyTsDynamic:
    """Decode tool string dynamic block.

    :param data: Source buffer.
    :param model: Hub model the block was read from.
    :param version: Tool string version reported by the static block.
    :param offset: Offset of the block.
    :raises GlHubUnsupportedVariant: No layout for the model/version combination.
    :raises GlHubBufferTooShort: The buffer does not hold the whole block.
    :return: Decoded dynamic block.
    """
    version = TsVersion.decode(version, "tool_string_version")
    layout = get_dynamic_layout(model, version)
    logger.debug(f"Dynamic block of {model} / {version}: {layout.__name__}")
    if issubclass(layout, TsDynamicGl3523):
        return layout.parse(data, offset, version)
    return layout.parse(data, offset)  # type: ignore[return-value]
