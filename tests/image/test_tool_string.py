#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests of tool string static and dynamic blocks.

The dynamic block layout is selected by the hub model and tool string version,
these tests cover the whole selection table, the bank status fields and the GL3523
bonding character interpretation.
"""

import pytest

from glhub.exceptions import (
    GlHubBufferTooShort,
    GlHubUnknownDiscriminator,
    GlHubUnsupportedVariant,
    GlHubValueError,
)
from glhub.image.tool_string import (
    FwStatus,
    Gl3523Bonding,
    HubModel,
    TsDynamic9Byte,
    TsDynamicGl3523,
    TsDynamicGl3525,
    TsDynamicGl3590,
    TsDynamicGl359030,
    TsStatic,
    TsVersion,
    decode_dynamic,
    decode_static,
    get_dynamic_layout,
)
from glhub.utils.config import Config


def test_static(static_data):
    static = decode_static(static_data)
    assert static.tool_string_version == TsVersion.VENDOR_SUPPORT
    assert static.tool_string_version.number == 3
    assert static.mask_project_code == "0501"
    assert static.mask_project_hardware == "0"
    assert static.mask_project_firmware == "01"
    assert static.mask_ic_name == "GL3523-10"
    assert static.running_project_code == "0601"
    assert static.hardware_revision(static.running_project_hardware) == "b"
    assert static.running_project_firmware == "02"
    assert static.running_ic_name == "GL3590-21"
    assert static.firmware_version == "0123"
    assert static.firmware_version_text == "01.23"
    assert static.export() == static_data
    assert len(static) == 31


def test_static_at_offset(static_data):
    data = b"\x00" * 3 + static_data + b"\x00" * 3
    assert decode_static(bytearray(data), 3) == decode_static(static_data)


def test_static_non_ascii(static_data):
    """Every byte of a character field survives decoding and export"""
    data = bytearray(static_data)
    data[1:5] = b"\xff\x00\x80A"
    static = decode_static(data)
    assert static.mask_project_code == "\xff\x00\x80A"
    assert len(static.mask_project_code) == 4
    assert static.export() == bytes(data)


@pytest.mark.parametrize("data", [b"\xff", b"\xff" + bytes(30), b"\x39" + bytes(30)])
def test_static_unknown_version(data):
    """Unknown version is reported before the buffer length is checked"""
    with pytest.raises(GlHubUnknownDiscriminator) as exc:
        decode_static(data)
    assert exc.value.value == data[0]
    assert exc.value.name == "tool_string_version"


@pytest.mark.parametrize("data", [b"", b"3", b"3" + bytes(29)])
def test_static_too_short(data):
    with pytest.raises(GlHubBufferTooShort):
        decode_static(data)


def test_static_invalid_texts():
    static = TsStatic(mask_project_ic_type="35A310", running_project_hardware="x")
    with pytest.raises(GlHubValueError):
        static.mask_ic_name
    with pytest.raises(GlHubValueError):
        static.hardware_revision(static.running_project_hardware)


@pytest.mark.parametrize(
    "model,version,layout",
    [
        (HubModel.GL3523, TsVersion.DYNAMIC_9BYTE, TsDynamic9Byte),
        (HubModel.GL3523, TsVersion.BONDING, TsDynamicGl3523),
        (HubModel.GL3523, TsVersion.BONDING_QC, TsDynamicGl3523),
        (HubModel.GL3523, TsVersion.VENDOR_SUPPORT, TsDynamicGl3523),
        (HubModel.GL3523, TsVersion.MULTI_TOKEN, TsDynamicGl3523),
        (HubModel.GL3523, TsVersion.DYNAMIC_2ND, TsDynamicGl3523),
        (HubModel.GL3523, TsVersion.DYNAMIC_13BYTE, TsDynamicGl3523),
        (HubModel.GL3523, TsVersion.BRAND_PROJECT, TsDynamicGl3523),
        (HubModel.GL3590, TsVersion.DYNAMIC_9BYTE, TsDynamic9Byte),
        (HubModel.GL3590, TsVersion.BONDING, TsDynamicGl3590),
        (HubModel.GL3590, TsVersion.BONDING_QC, TsDynamicGl3590),
        (HubModel.GL3590, TsVersion.VENDOR_SUPPORT, TsDynamicGl3590),
        (HubModel.GL3590, TsVersion.MULTI_TOKEN, TsDynamicGl3590),
        (HubModel.GL3590, TsVersion.DYNAMIC_2ND, TsDynamicGl3590),
        (HubModel.GL3590, TsVersion.DYNAMIC_13BYTE, TsDynamicGl359030),
        (HubModel.GL3590, TsVersion.BRAND_PROJECT, TsDynamicGl359030),
        (HubModel.GL3525, TsVersion.DYNAMIC_13BYTE, TsDynamicGl3525),
        (HubModel.GL3525, TsVersion.BRAND_PROJECT, TsDynamicGl3525),
        (HubModel.GL3590, 0x37, TsDynamicGl359030),
    ],
)
def test_dynamic_layout(model, version, layout):
    assert get_dynamic_layout(model, version) is layout


@pytest.mark.parametrize(
    "model,version",
    [
        (HubModel.GL3523, TsVersion.RESERVED),
        (HubModel.GL3590, TsVersion.RESERVED),
        (HubModel.GL3525, TsVersion.RESERVED),
        (HubModel.GL3525, TsVersion.DYNAMIC_9BYTE),
        (HubModel.GL3525, TsVersion.BONDING),
        (HubModel.GL3525, TsVersion.DYNAMIC_2ND),
    ],
)
def test_dynamic_unsupported(model, version, dynamic_common):
    with pytest.raises(GlHubUnsupportedVariant) as exc:
        get_dynamic_layout(model, version)
    assert exc.value.model == model
    assert exc.value.version == version
    with pytest.raises(GlHubUnsupportedVariant):
        decode_dynamic(dynamic_common + bytes(16), model, version)


def test_dynamic_unknown_version(dynamic_common):
    with pytest.raises(GlHubUnknownDiscriminator):
        decode_dynamic(dynamic_common, HubModel.GL3590, 0xFF)


def test_dynamic_version_of_other_enum(dynamic_common):
    """Members of other enumerations sharing a tag do not select a layout"""
    data = dynamic_common + b"\x81" + b"\x32" + bytes(3)
    with pytest.raises(GlHubUnknownDiscriminator) as exc:
        decode_dynamic(data, HubModel.GL3590, FwStatus.BANK2)
    assert exc.value.name == "tool_string_version"
    with pytest.raises(GlHubUnknownDiscriminator):
        get_dynamic_layout(HubModel.GL3523, FwStatus.BANK1)
    assert TsVersion.BONDING != FwStatus.BANK1
    assert TsVersion.BONDING == 0x31


@pytest.mark.parametrize(
    "layout,length",
    [
        (TsDynamic9Byte, 9),
        (TsDynamicGl3523, 10),
        (TsDynamicGl3590, 10),
        (TsDynamicGl359030, 14),
        (TsDynamicGl3525, 17),
    ],
)
def test_dynamic_length(layout, length):
    assert layout.fixed_length() == length
    assert len(layout().export()) == length


def test_dynamic_common_fields(dynamic_common):
    dynamic = decode_dynamic(dynamic_common, HubModel.GL3590, TsVersion.DYNAMIC_9BYTE)
    assert isinstance(dynamic, TsDynamic9Byte)
    assert dynamic.running_mask_code
    assert dynamic.ss_port_count == 4
    assert dynamic.hs_port_count == 4
    assert dynamic.get_ports("ss_connection_status") == [1, 3]
    assert dynamic.get_ports("hs_connection_status") == [1, 3]
    assert dynamic.get_bitfield("fs_connection_status") == 0x0A
    assert dynamic.get_ports("ls_connection_status") == []
    assert dynamic.get_ports("charging") == [1, 2, 3, 4]
    assert dynamic.get_bitfield("non_removable_port_status") == 3
    assert dynamic.export() == dynamic_common


def test_dynamic_invalid_bitfield():
    dynamic = TsDynamic9Byte(charging="Z")
    with pytest.raises(GlHubValueError):
        dynamic.get_ports("charging")


def test_dynamic_gl3590(dynamic_common):
    dynamic = decode_dynamic(dynamic_common + b"\x81", HubModel.GL3590, TsVersion.DYNAMIC_2ND)
    assert isinstance(dynamic, TsDynamicGl3590)
    assert dynamic.bonding == 0x81
    assert dynamic.flash_dump_bank1


def test_dynamic_gl3590_bank_status(dynamic_common):
    """Bank status bytes: hub in bank 1, device bridge in mask, version little endian"""
    data = dynamic_common + b"\x00" + b"\x31\x30\x34\x12"
    dynamic = decode_dynamic(data, HubModel.GL3590, TsVersion.DYNAMIC_13BYTE)
    assert isinstance(dynamic, TsDynamicGl359030)
    assert dynamic.hub_fw_status == FwStatus.BANK1
    assert dynamic.dev_fw_status == FwStatus.MASK
    assert dynamic.dev_fw_version == 0x1234
    assert not dynamic.flash_dump_bank1
    assert dynamic.export() == data


def test_dynamic_gl3525(dynamic_common):
    data = dynamic_common + b"\x80" + b"\x32\x31\x01\x02\x30\x03\x04"
    dynamic = decode_dynamic(data, HubModel.GL3525, TsVersion.BRAND_PROJECT, 0)
    assert isinstance(dynamic, TsDynamicGl3525)
    assert dynamic.flash_dump_bank1
    assert dynamic.hub_fw_status == FwStatus.BANK2
    assert dynamic.pd_fw_status == FwStatus.BANK1
    assert dynamic.pd_fw_version == 0x0201
    assert dynamic.dev_fw_status == FwStatus.MASK
    assert dynamic.dev_fw_version == 0x0403


def test_dynamic_unknown_status(dynamic_common):
    data = dynamic_common + b"\x00" + b"\x33\x30\x34\x12"
    with pytest.raises(GlHubUnknownDiscriminator) as exc:
        decode_dynamic(data, HubModel.GL3590, TsVersion.DYNAMIC_13BYTE)
    assert exc.value.name == "hub_fw_status"
    assert exc.value.value == 0x33


def test_dynamic_too_short(dynamic_common):
    with pytest.raises(GlHubBufferTooShort):
        decode_dynamic(dynamic_common + b"\x00\x31", HubModel.GL3590, TsVersion.DYNAMIC_13BYTE)


def test_dynamic_gl3523_keeps_version(dynamic_common):
    dynamic = decode_dynamic(dynamic_common + b"5", HubModel.GL3523, 0x32)
    assert isinstance(dynamic, TsDynamicGl3523)
    assert dynamic.tool_string_version == TsVersion.BONDING_QC
    assert dynamic.bonding_bits.qc_disabled
    assert dynamic.export() == dynamic_common + b"5"


def test_bonding_version_dependent():
    """The same character means different things in version 1 and version 2"""
    v1 = Gl3523Bonding.decode("5", 1)
    assert v1.value == 5
    assert v1.four_ports
    assert not v1.multi_token
    assert v1.type_c_disabled
    assert v1.qc_disabled is None
    assert not v1.flash_dump_bank1

    v2 = Gl3523Bonding.decode("5", 2)
    assert v2.qc_disabled
    assert not v2.four_ports
    assert v2.multi_token
    assert not v2.type_c_disabled
    assert not v2.flash_dump_bank1


def test_bonding_flash_dump():
    assert Gl3523Bonding.decode("8", 1).flash_dump_bank1
    assert not Gl3523Bonding.decode("8", 3).flash_dump_bank1
    assert Gl3523Bonding.decode("G", 3).flash_dump_bank1
    assert Gl3523Bonding.decode("V", 8).value == 0x1F


@pytest.mark.parametrize("bonding,version", [("G", 1), ("W", 2), ("!", 2), ("", 2), ("11", 2), ("a", 2), ("f", 1), ("v", 8)])
def test_bonding_invalid(bonding, version):
    with pytest.raises(GlHubUnknownDiscriminator):
        Gl3523Bonding.decode(bonding, version)


@pytest.mark.parametrize("version", [0, 6, 9, -1])
def test_bonding_unknown_version(version):
    """Only enumerated versions have a known bit width"""
    with pytest.raises(GlHubUnsupportedVariant):
        Gl3523Bonding.decode("1", version)


def test_bonding_version_0():
    with pytest.raises(GlHubUnsupportedVariant):
        TsDynamicGl3523(tool_string_version=TsVersion.DYNAMIC_9BYTE).bonding_bits


def test_validate_in_memory():
    """Records built in memory are checked the same way as decoded ones"""
    TsDynamicGl359030(hub_fw_status=FwStatus.BANK2).validate()
    with pytest.raises(GlHubUnknownDiscriminator):
        TsDynamicGl359030(hub_fw_status=0x33).validate()
    with pytest.raises(GlHubValueError):
        TsStatic(firmware_version="123").validate()
    with pytest.raises(GlHubValueError):
        TsDynamicGl3590(bonding=0x100).validate()
    assert TsStatic(firmware_version="123").verify().has_errors


def test_static_config(static_data):
    static = decode_static(static_data)
    cfg = static.get_config()
    assert cfg["tool_string_version"] == "VendorSupport"
    assert cfg["firmware_version"] == "0123"
    assert TsStatic.load_from_config(cfg) == static
    assert "firmware_version: '0123'" in cfg.to_yaml()


def test_dynamic_config(dynamic_common):
    dynamic = decode_dynamic(dynamic_common + b"7", HubModel.GL3523, TsVersion.MULTI_TOKEN)
    cfg = Config(dynamic.get_config())
    assert cfg["tool_string_version"] == "MultiToken"
    assert TsDynamicGl3523.load_from_config(cfg) == dynamic

    bank = TsDynamicGl3525(pd_fw_status=FwStatus.BANK1, pd_fw_version=0x0102)
    cfg = bank.get_config()
    assert cfg["pd_fw_status"] == "Bank1"
    assert TsDynamicGl3525.load_from_config(cfg) == bank


def test_record_repr(static_data):
    assert repr(decode_static(static_data)) == "TsStatic(Tool string static block)"
    assert repr(Gl3523Bonding.decode("5", 2)).startswith("Gl3523Bonding(value=5")


def test_verify_enum_field_strict():
    """Raw tags in enumeration fields are reported, not accepted"""
    verifier = TsDynamicGl359030(hub_fw_status=0x32).verify()  # type: ignore[arg-type]
    assert verifier.has_errors
    assert not TsDynamicGl359030(hub_fw_status=FwStatus.BANK2).verify().has_errors
