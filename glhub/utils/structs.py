#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Declarative fixed layout records.

A record is a frozen dataclass deriving from :class:`FixedStruct` whose ``FIELDS``
tuple lists the wire fields in order. Offsets, size, parsing, export, validation,
verification reports and configuration conversion are all derived from that table::

    @dataclass(frozen=True, repr=False)
    class Example(FixedStruct):
        FIELDS = (
            Field("magic", 4, FieldKind.CHARS, constant=b"XROM"),
            Field("value", 2, FieldKind.UINT, Endianness.LITTLE),
        )

        magic: str = "XROM"
        value: int = 0
"""

import logging
from typing import Any, Union

from prettytable import PrettyTable
from typing_extensions import Self

from glhub.exceptions import (
    GlHubConstantMismatch,
    GlHubError,
    GlHubKeyError,
    GlHubUnknownDiscriminator,
)
from glhub.utils.abstract import BaseClass
from glhub.utils.config import Config
from glhub.utils.fields import Buffer, Field, FieldKind, check_bounds
from glhub.utils.glhub_enum import GlHubEnum
from glhub.utils.misc import bytes_to_print, chars_to_print
from glhub.utils.verifier import Verifier, VerifierResult

logger = logging.getLogger(__name__)


class FixedStruct(BaseClass):
    """Base of all fixed layout records.

    :cvar FIELDS: Ordered wire fields of the record.
    :cvar CONSTANT_ERROR: Exception raised when a literal field does not match.
    :cvar NAME: Human readable name of the block.
    """

    FIELDS: tuple[Field, ...] = ()
    CONSTANT_ERROR: type[GlHubConstantMismatch] = GlHubConstantMismatch
    NAME = "Fixed structure"

    @classmethod
    def fixed_length(cls) -> int:
        """Get length of the block in bytes."""
        return sum(field.size for field in cls.FIELDS)

    @classmethod
    def layout(cls) -> list[tuple[int, Field]]:
        """Get offset table of the block.

        :return: List of (offset, field) pairs in wire order.
        """
        ret = []
        offset = 0
        for field in cls.FIELDS:
            ret.append((offset, field))
            offset += field.size
        return ret

    @classmethod
    def offset_of(cls, name: str) -> int:
        """Get offset of the named field.

        :param name: Field name.
        :raises GlHubKeyError: No such field.
        :return: Offset relative to the start of the block.
        """
        for offset, field in cls.layout():
            if field.name == name:
                return offset
        raise GlHubKeyError(f"{cls.__name__} has no field {name}")

    @classmethod
    def get_field(cls, name: str) -> Field:
        """Get field description by its name.

        :param name: Field name.
        :raises GlHubKeyError: No such field.
        :return: Field description.
        """
        for field in cls.FIELDS:
            if field.name == name:
                return field
        raise GlHubKeyError(f"{cls.__name__} has no field {name}")

    @classmethod
    def _parse_fields(cls, data: Buffer, offset: int = 0) -> dict[str, Any]:
        """Decode all wire fields.

        The whole block length is checked before any field is decoded, then the fields
        are decoded in wire order so the first failing field is reported.

        :param data: Source buffer.
        :param offset: Offset of the block.
        :return: Dictionary of field values.
        """
        check_bounds(data, offset, cls.fixed_length(), cls.__name__)
        return {
            field.name: field.decode(data, offset + field_offset, cls.CONSTANT_ERROR)
            for field_offset, field in cls.layout()
        }

    @classmethod
    def parse(cls, data: Buffer, offset: int = 0) -> Self:
        """Parse the block from a buffer.

        :param data: Source buffer, it is neither kept nor modified.
        :param offset: Offset of the block in the buffer.
        :raises GlHubBufferTooShort: The buffer does not hold the whole block.
        :raises GlHubConstantMismatch: A literal field does not match.
        :raises GlHubUnknownDiscriminator: An enumeration byte is unknown.
        :return: Decoded record.
        """
        return cls(**cls._parse_fields(data, offset))  # type: ignore[call-arg]

    def export(self) -> bytes:
        """Export the record into its binary form.

        :return: Exactly :meth:`fixed_length` bytes.
        """
        return b"".join(field.encode(getattr(self, field.name)) for field in self.FIELDS)

    def __len__(self) -> int:
        return self.fixed_length()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.NAME})"

    def __str__(self) -> str:
        table = PrettyTable()
        table.field_names = ["Offset", "Size", "Field", "Value"]
        table.align = "l"
        for offset, field in self.layout():
            table.add_row([f"0x{offset:03X}", field.size, field.name, self._value_to_print(field)])
        return f"{self.NAME}:\n{table.get_string()}\n"

    def _value_to_print(self, field: Field) -> str:
        value = getattr(self, field.name)
        if isinstance(value, GlHubEnum):
            return value.label
        if field.kind == FieldKind.UINT and isinstance(value, int):
            return f"0x{value:0{field.size * 2}X}"
        if field.kind == FieldKind.CHARS and isinstance(value, str):
            return f"'{chars_to_print(value)}'"
        if isinstance(value, (bytes, bytearray)):
            return bytes_to_print(bytes(value))
        return str(value)

    def _check_field(self, field: Field) -> None:
        """Check one field value of the record.

        :param field: Field to check.
        :raises GlHubUnknownDiscriminator: Enumeration field holds a foreign value.
        :raises GlHubValueError: Value does not fit the field width or type.
        :raises GlHubConstantMismatch: Literal field does not hold its literal.
        """
        value = getattr(self, field.name)
        if field.kind == FieldKind.ENUM:
            assert field.enum is not None
            if not isinstance(value, field.enum):
                raise GlHubUnknownDiscriminator(field.enum.__name__, value, field.name)
        raw = field.encode(value)
        if field.constant is not None and raw != field.constant:
            raise self.CONSTANT_ERROR(field.name, field.constant, raw)

    def validate(self) -> None:
        """Validate the record, no matter whether it was parsed or built in memory.

        Fields are checked in wire order and the first failure is raised.

        :raises GlHubError: Typed error describing the first invalid field.
        """
        for field in self.FIELDS:
            self._check_field(field)

    def verify(self) -> Verifier:
        """Get verification report of the record.

        :return: Verifier with one record per field.
        """
        ret = Verifier(self.NAME)
        for field in self.FIELDS:
            value = getattr(self, field.name)
            if field.kind == FieldKind.ENUM and field.constant is None:
                assert field.enum is not None
                ret.add_record_enum(field.name, value, field.enum)
            elif field.kind == FieldKind.UINT and field.constant is None:
                ret.add_record_range(field.name, value, max_val=(1 << 8 * field.size) - 1)
            elif field.kind == FieldKind.BYTES and field.constant is None:
                ret.add_record_bytes(field.name, value, field.size)
            else:
                try:
                    self._check_field(field)
                except GlHubError as exc:
                    ret.add_record(field.name, VerifierResult.ERROR, exc.description)
                    continue
                ret.add_record(
                    field.name,
                    VerifierResult.SUCCEEDED,
                    self._value_to_print(field),
                    important=field.constant is None,
                )
        return ret

    def get_config(self) -> Config:
        """Get configuration describing the record.

        Literal fields are omitted, they are implied by the record type.

        :return: Configuration dictionary.
        """
        ret = Config()
        for field in self.FIELDS:
            if field.constant is not None:
                continue
            value: Union[int, str] = getattr(self, field.name)
            if isinstance(value, GlHubEnum):
                value = value.label
            elif isinstance(value, (bytes, bytearray)):
                value = bytes(value).hex()
            ret[field.name] = value
        return ret

    @classmethod
    def _config_to_fields(cls, config: Config) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        for field in cls.FIELDS:
            if field.constant is not None:
                kwargs[field.name] = field.default
            elif field.kind == FieldKind.ENUM:
                assert field.enum is not None
                kwargs[field.name] = field.enum.from_attr(config[field.name])
            elif field.kind == FieldKind.UINT:
                kwargs[field.name] = config.get_int(field.name)
            elif field.kind == FieldKind.CHARS:
                kwargs[field.name] = config.get_str(field.name)
            else:
                kwargs[field.name] = config.get_bytes(field.name)
        return kwargs

    @classmethod
    def load_from_config(cls, config: Config) -> Self:
        """Create the record from configuration.

        :param config: Configuration dictionary as produced by :meth:`get_config`.
        :raises GlHubError: Missing or invalid value in the configuration.
        :return: Record; it is validated before it is returned.
        """
        ret = cls(**cls._config_to_fields(config))  # type: ignore[call-arg]
        ret.validate()
        return ret
