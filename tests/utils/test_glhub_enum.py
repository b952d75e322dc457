#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB GlHubEnum utility tests.

This module contains test cases for the GlHubEnum class, the enumeration with tag,
label and description used for all single byte discriminators.
"""

import pytest

from glhub.exceptions import GlHubKeyError, GlHubTypeError, GlHubUnknownDiscriminator
from glhub.utils.glhub_enum import GlHubEnum


class GlHubEnumNumbers(GlHubEnum):
    """GLHUB test enumeration with ASCII digit tags."""

    ZERO = (0x30, "Zero")
    ONE = (0x31, "One", "Just one.")
    TWO = (0x32, "Two")


def test_equals() -> None:
    """Test equality of enum members with their tag and label."""
    assert GlHubEnumNumbers.ONE == 0x31
    assert GlHubEnumNumbers.ONE == "One"
    assert GlHubEnumNumbers.ONE != 0x32
    assert GlHubEnumNumbers.ONE != GlHubEnumNumbers.TWO
    assert str(GlHubEnumNumbers.TWO) == "Two"


def test_from_tag() -> None:
    """Test lookup of enum members by tag.

    :raises GlHubKeyError: When an invalid tag value is provided to from_tag().
    """
    one = GlHubEnumNumbers.from_tag(0x31)
    assert one is GlHubEnumNumbers.ONE
    assert one.description == "Just one."
    assert GlHubEnumNumbers.ZERO.description is None
    with pytest.raises(GlHubKeyError):
        GlHubEnumNumbers.from_tag(0x33)


def test_from_label() -> None:
    """Test case insensitive lookup of enum members by label."""
    assert GlHubEnumNumbers.from_label("two") is GlHubEnumNumbers.TWO
    assert GlHubEnumNumbers.from_attr("ZERO") is GlHubEnumNumbers.ZERO
    assert GlHubEnumNumbers.from_attr(0x30) is GlHubEnumNumbers.ZERO
    with pytest.raises(GlHubKeyError):
        GlHubEnumNumbers.from_label("Three")
    with pytest.raises(GlHubKeyError):
        GlHubEnumNumbers.from_label(0x30)  # type: ignore[arg-type]


def test_decode() -> None:
    """Test decoding of byte read from binary data.

    Unknown bytes are parsing errors, not key errors.
    """
    assert GlHubEnumNumbers.decode(0x32, "field") is GlHubEnumNumbers.TWO
    with pytest.raises(GlHubUnknownDiscriminator) as exc:
        GlHubEnumNumbers.decode(0x39, "field")
    assert exc.value.enum_name == "GlHubEnumNumbers"
    assert exc.value.value == 0x39
    assert exc.value.name == "field"
    assert "0x39" in str(exc.value)


class GlHubEnumLetters(GlHubEnum):
    """GLHUB test enumeration sharing tags with GlHubEnumNumbers."""

    ZERO = (0x30, "Zero")
    A = (0x41, "A")


def test_other_enum_not_equal() -> None:
    """Members of different enumerations differ even with the same tag and label."""
    assert GlHubEnumNumbers.ZERO != GlHubEnumLetters.ZERO
    assert GlHubEnumLetters.ZERO == 0x30
    assert GlHubEnumLetters.ZERO == "Zero"
    assert GlHubEnumLetters.ZERO == GlHubEnumLetters.ZERO
    assert GlHubEnumNumbers.ZERO not in {GlHubEnumLetters.ZERO: 1}


def test_decode_member() -> None:
    """Members are passed through, members of other enumerations are refused."""
    assert GlHubEnumNumbers.decode(GlHubEnumNumbers.ONE) is GlHubEnumNumbers.ONE
    with pytest.raises(GlHubUnknownDiscriminator) as exc:
        GlHubEnumNumbers.decode(GlHubEnumLetters.ZERO, "field")
    assert exc.value.value is GlHubEnumLetters.ZERO
    with pytest.raises(GlHubUnknownDiscriminator):
        GlHubEnumNumbers.decode("One", "field")  # type: ignore[arg-type]


def test_from_attr_type() -> None:
    with pytest.raises(GlHubTypeError):
        GlHubEnumNumbers.from_attr(1.0)  # type: ignore[arg-type]
    with pytest.raises(GlHubTypeError):
        GlHubEnumNumbers.from_attr(GlHubEnumLetters.ZERO)  # type: ignore[arg-type]
