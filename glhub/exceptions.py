#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB exception classes.

This module defines the hierarchy of exceptions raised by the decoders. Every
exception derives from :class:`GlHubError` so the orchestration layer can catch the
whole family at once, while the concrete classes tell apart truncated buffers,
literal mismatches, unknown enumeration bytes and unsupported layouts.
"""

from typing import Any, Optional

#######################################################################
# # GLHUB Exceptions
#######################################################################


class GlHubError(Exception):
    """GLHUB Base Exception.

    Base exception class for all errors raised by the decoders.

    :cvar fmt: Default error message format template.
    """

    fmt = "GLHUB: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base GLHUB Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return string representation of the exception.

        :return: Formatted exception message as string.
        """
        return self.fmt.format(description=self.description or "Unknown Error")


class GlHubKeyError(GlHubError, KeyError):
    """GLHUB Key Error exception for missing or invalid keys."""


class GlHubValueError(GlHubError, ValueError):
    """GLHUB standard value error exception."""


class GlHubTypeError(GlHubError, TypeError):
    """GLHUB standard type error exception."""


class GlHubLengthError(GlHubError, ValueError):
    """GLHUB length validation error for binary data operations."""


class GlHubParsingError(GlHubError):
    """GLHUB parsing error exception.

    Raised when the bytes of a block do not form a valid structure.
    """


class GlHubVerificationError(GlHubError):
    """GLHUB verification error exception.

    Raised by :meth:`glhub.utils.verifier.Verifier.validate` when a report holds errors.
    """


class GlHubBufferTooShort(GlHubLengthError):
    """Buffer does not hold the requested field or structure."""

    def __init__(self, name: str, offset: int, size: int, available: int) -> None:
        """Initialize the exception.

        :param name: Name of the field or structure being read.
        :param offset: Offset of the read.
        :param size: Requested width in bytes.
        :param available: Length of the buffer.
        """
        super().__init__(
            f"Buffer too short for {name}: {size} bytes at offset {offset} requested, "
            f"buffer has {available} bytes"
        )
        self.name = name
        self.offset = offset
        self.size = size
        self.available = available


class GlHubConstantMismatch(GlHubParsingError):
    """Literal or magic field differs from its expected value."""

    def __init__(self, name: str, expected: bytes, actual: bytes) -> None:
        """Initialize the exception.

        :param name: Name of the literal field.
        :param expected: Expected byte sequence.
        :param actual: Byte sequence found in the data.
        """
        super().__init__(
            f"Constant mismatch in {name}: expected {expected.hex()} ({expected!r}), "
            f"got {actual.hex()} ({actual!r})"
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class GlHubUnrecognizedFirmwareClass(GlHubConstantMismatch):
    """Firmware class header magic does not match.

    The orchestration layer uses this exception to try the next firmware class.
    """

    fmt = "GLHUB: Unrecognized firmware class: {description}"


class GlHubMalformedCodesign(GlHubConstantMismatch):
    """Codesign block literal (tag or terminator) does not match."""

    fmt = "GLHUB: Malformed codesign block: {description}"


class GlHubUnknownDiscriminator(GlHubParsingError):
    """Enumeration byte outside of its defined set."""

    def __init__(self, enum_name: str, value: Any, name: Optional[str] = None) -> None:
        """Initialize the exception.

        :param enum_name: Name of the enumeration.
        :param value: Value that does not map to any member.
        :param name: Optional name of the field holding the value.
        """
        value_str = f"0x{value:02X}" if isinstance(value, int) else repr(value)
        field = f" in field {name}" if name else ""
        super().__init__(f"Unknown {enum_name} value {value_str}{field}")
        self.enum_name = enum_name
        self.value = value
        self.name = name


class GlHubUnsupportedVariant(GlHubParsingError):
    """No layout is known for the requested model/version combination."""

    def __init__(self, model: Any, version: Any) -> None:
        """Initialize the exception.

        :param model: Hub model (or other selector) of the request.
        :param version: Tool string version (or other discriminator) of the request.
        """
        super().__init__(f"Unsupported model/version combination: {model} / {version}")
        self.model = model
        self.version = version
