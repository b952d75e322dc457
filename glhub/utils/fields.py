#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Primitive field codec.

Readers and writers of the fixed-width fields found in hub firmware blocks: unsigned
integers with explicit endianness, character arrays, raw byte arrays, single byte
enumerations and literal constants.

Character arrays are decoded with ``latin-1`` so that every byte maps to exactly one
character. The declared width is authoritative: no NUL termination is assumed and
nothing is stripped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Type, Union

from glhub.exceptions import GlHubBufferTooShort, GlHubConstantMismatch, GlHubValueError
from glhub.utils.glhub_enum import GlHubEnum
from glhub.utils.misc import Endianness

Buffer = Union[bytes, bytearray, memoryview]

CHARS_ENCODING = "latin-1"


class FieldKind(str, Enum):
    """Kind of a fixed-width field."""

    UINT = "uint"
    CHARS = "chars"
    BYTES = "bytes"
    ENUM = "enum"


@dataclass(frozen=True)
class Field:
    """Description of one field of a fixed layout.

    :param name: Attribute name of the field in the record.
    :param size: Width in bytes.
    :param kind: Kind of the field.
    :param endianness: Byte order of UINT fields.
    :param constant: Literal value the field must hold, if any.
    :param enum: Enumeration of ENUM fields.
    """

    name: str
    size: int
    kind: FieldKind = FieldKind.BYTES
    endianness: Endianness = Endianness.BIG
    constant: Optional[bytes] = None
    enum: Optional[Type[GlHubEnum]] = None

    def decode(
        self,
        data: Buffer,
        offset: int,
        error: Type[GlHubConstantMismatch] = GlHubConstantMismatch,
    ) -> Union[int, str, bytes, GlHubEnum]:
        """Decode value of the field.

        :param data: Source buffer.
        :param offset: Absolute offset of the field in the buffer.
        :param error: Exception raised when a literal field does not match.
        :return: Decoded value.
        """
        if self.constant is not None:
            expect_constant(data, offset, self.size, self.constant, self.name, error)
        if self.kind == FieldKind.UINT:
            return read_uint(data, offset, self.size, self.endianness, self.name)
        if self.kind == FieldKind.CHARS:
            return read_chars(data, offset, self.size, self.name)
        if self.kind == FieldKind.ENUM:
            assert self.enum is not None
            return read_enum(data, offset, self.enum, self.name)
        return read_bytes(data, offset, self.size, self.name)

    def encode(self, value: Union[int, str, bytes, GlHubEnum]) -> bytes:
        """Encode value of the field.

        :param value: Value to encode.
        :raises GlHubValueError: The value does not fit the field.
        :return: Exactly ``size`` bytes.
        """
        if self.kind == FieldKind.ENUM:
            if not isinstance(value, GlHubEnum):
                raise GlHubValueError(f"Field {self.name} requires enumeration member")
            return write_uint(value.tag, self.size, self.endianness, self.name)
        if self.kind == FieldKind.UINT:
            if not isinstance(value, int) or isinstance(value, bool):
                raise GlHubValueError(f"Field {self.name} requires integer value")
            return write_uint(value, self.size, self.endianness, self.name)
        if self.kind == FieldKind.CHARS:
            if not isinstance(value, str):
                raise GlHubValueError(f"Field {self.name} requires string value")
            return write_chars(value, self.size, self.name)
        if not isinstance(value, (bytes, bytearray)):
            raise GlHubValueError(f"Field {self.name} requires bytes value")
        return write_bytes(value, self.size, self.name)

    @property
    def default(self) -> Union[int, str, bytes]:
        """Default value of the field: its constant, or zeros."""
        if self.constant is not None:
            if self.kind == FieldKind.UINT:
                return int.from_bytes(self.constant, self.endianness.value)
            if self.kind == FieldKind.CHARS:
                return self.constant.decode(CHARS_ENCODING)
            return self.constant
        if self.kind == FieldKind.UINT:
            return 0
        if self.kind == FieldKind.CHARS:
            return "\x00" * self.size
        return bytes(self.size)


def check_bounds(data: Buffer, offset: int, size: int, name: str = "field") -> None:
    """Check that the buffer holds ``size`` bytes at ``offset``.

    :param data: Source buffer.
    :param offset: Offset of the read.
    :param size: Width of the read.
    :param name: Name of the field for the error message.
    :raises GlHubBufferTooShort: The buffer is too short (or offset is negative).
    """
    if offset < 0 or size < 0 or offset + size > len(data):
        raise GlHubBufferTooShort(name, offset, size, len(data))


def read_bytes(data: Buffer, offset: int, size: int, name: str = "field") -> bytes:
    """Read raw byte array.

    :param data: Source buffer.
    :param offset: Offset of the field.
    :param size: Width of the field.
    :param name: Name of the field for the error message.
    :return: Copy of the bytes.
    """
    check_bounds(data, offset, size, name)
    return bytes(data[offset : offset + size])


def read_uint(
    data: Buffer,
    offset: int,
    size: int,
    endianness: Endianness = Endianness.BIG,
    name: str = "field",
) -> int:
    """Read unsigned integer.

    :param data: Source buffer.
    :param offset: Offset of the field.
    :param size: Width of the field.
    :param endianness: Byte order.
    :param name: Name of the field for the error message.
    :return: Decoded integer.
    """
    return int.from_bytes(read_bytes(data, offset, size, name), endianness.value)


def read_chars(data: Buffer, offset: int, size: int, name: str = "field") -> str:
    """Read character array, one character per byte.

    :param data: Source buffer.
    :param offset: Offset of the field.
    :param size: Width of the field.
    :param name: Name of the field for the error message.
    :return: Decoded text of exactly ``size`` characters.
    """
    return read_bytes(data, offset, size, name).decode(CHARS_ENCODING)


def read_enum(
    data: Buffer, offset: int, enum: Type[GlHubEnum], name: str = "field"
) -> GlHubEnum:
    """Read single byte enumeration.

    :param data: Source buffer.
    :param offset: Offset of the field.
    :param enum: Enumeration to map the byte to.
    :param name: Name of the field for the error message.
    :raises GlHubUnknownDiscriminator: The byte is not a member of the enumeration.
    :return: Enumeration member.
    """
    return enum.decode(read_uint(data, offset, 1, name=name), name)


def expect_constant(
    data: Buffer,
    offset: int,
    size: int,
    expected: bytes,
    name: str = "field",
    error: Type[GlHubConstantMismatch] = GlHubConstantMismatch,
) -> bytes:
    """Read field and check it holds the expected literal.

    :param data: Source buffer.
    :param offset: Offset of the field.
    :param size: Width of the field.
    :param expected: Expected byte sequence.
    :param name: Name of the field for the error message.
    :param error: Exception class raised on mismatch.
    :raises GlHubConstantMismatch: The bytes differ from the expected literal.
    :return: The bytes read.
    """
    actual = read_bytes(data, offset, size, name)
    if actual != expected:
        raise error(name, expected, actual)
    return actual


def write_uint(
    value: int, size: int, endianness: Endianness = Endianness.BIG, name: str = "field"
) -> bytes:
    """Encode unsigned integer.

    :param value: Value to encode.
    :param size: Width of the field.
    :param endianness: Byte order.
    :param name: Name of the field for the error message.
    :raises GlHubValueError: The value does not fit the field.
    :return: Encoded bytes.
    """
    if not 0 <= value < (1 << (8 * size)):
        raise GlHubValueError(f"Value {value} of {name} does not fit into {size} bytes")
    return value.to_bytes(size, endianness.value)


def write_chars(value: str, size: int, name: str = "field") -> bytes:
    """Encode character array.

    :param value: Text of exactly ``size`` characters in range 0-255.
    :param size: Width of the field.
    :param name: Name of the field for the error message.
    :raises GlHubValueError: The text does not fit the field.
    :return: Encoded bytes.
    """
    try:
        raw = value.encode(CHARS_ENCODING)
    except UnicodeEncodeError as exc:
        raise GlHubValueError(f"Field {name} holds characters out of byte range") from exc
    return write_bytes(raw, size, name)


def write_bytes(value: bytes, size: int, name: str = "field") -> bytes:
    """Encode raw byte array.

    :param value: Bytes of exactly ``size`` length.
    :param size: Width of the field.
    :param name: Name of the field for the error message.
    :raises GlHubValueError: The length differs from the field width.
    :return: Copy of the bytes.
    """
    if len(value) != size:
        raise GlHubValueError(f"Field {name} requires {size} bytes, got {len(value)}")
    return bytes(value)
