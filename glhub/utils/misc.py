#!/usr/bin/env python
# -*- coding: UTF-8 -*-
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB miscellaneous utilities and helper functions."""

import json
import logging
import re
import textwrap
from enum import Enum
from typing import Optional, Union

import yaml

from glhub import GLHUB_DEBUG
from glhub.exceptions import GlHubError

logger = logging.getLogger(__name__)


class Endianness(str, Enum):
    """Endianness enumeration of supported byte orders.

    :cvar BIG: Big-endian byte order representation.
    :cvar LITTLE: Little-endian byte order representation.
    """

    BIG = "big"
    LITTLE = "little"

    @classmethod
    def values(cls) -> list[str]:
        """Get enumeration values.

        :return: List of all enumeration values as strings.
        """
        return [mem.value for mem in Endianness.__members__.values()]


def value_to_int(value: Union[bytes, bytearray, int, str], default: Optional[int] = None) -> int:
    """Convert value from multiple formats to integer.

    Supports conversion from integers, bytes, bytearrays, and string representations
    (including binary, octal, decimal, and hexadecimal formats with optional prefixes).

    :param value: Input value to convert (int, bytes, bytearray, or str).
    :param default: Default value returned when conversion fails.
    :return: Converted integer value.
    :raises GlHubError: Unsupported input type or invalid conversion without default.
    """
    if isinstance(value, int):
        return value

    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, Endianness.BIG.value)

    if isinstance(value, str) and value != "":
        match = re.match(
            r"(?P<prefix>0[box])?(?P<number>[0-9a-f_]+)(?P<suffix>[ul]{0,3})$",
            value.strip().lower(),
        )
        if match:
            base = {"0b": 2, "0o": 8, "0": 10, "0x": 16, None: 10}[match.group("prefix")]
            try:
                return int(match.group("number"), base=base)
            except ValueError:
                pass

    if default is not None:
        return default
    raise GlHubError(f"Invalid input number type({type(value)}) with value ({value})")


def bytes_to_print(
    data: Optional[bytes], max_length: int = 32, unavailable_text: str = "Not available"
) -> str:
    """Format bytes data for display with length-based truncation.

    :param data: Bytes data to format, can be None or empty.
    :param max_length: Maximum number of bytes to display before truncation.
    :param unavailable_text: Text to show when data is None or empty.
    :return: Formatted string representation of the bytes data.
    """
    if not data:
        return unavailable_text

    if len(data) <= max_length:
        return data.hex()

    return f"{data[:max_length].hex()}...(truncated to {max_length}, total {len(data)})"


def wrap_text(text: str, max_line: int = 100) -> str:
    """Wrap text while preserving existing line breaks.

    :param text: Input text to be wrapped.
    :param max_line: Maximum line length for wrapped output, defaults to 100.
    :return: Formatted text with appropriate line breaks inserted.
    """
    lines = text.splitlines()
    return "\n".join([textwrap.fill(text=line, width=max_line) for line in lines])


def chars_to_print(text: str) -> str:
    """Format character array for display, escaping non printable characters.

    :param text: Decoded character array.
    :return: Printable representation.
    """
    return "".join(
        ch if ch.isprintable() and ord(ch) < 0x7F else f"\\x{ord(ch):02x}" for ch in text
    )


def load_configuration(path: str) -> dict:
    """Load configuration from YAML or JSON file.

    The method attempts to parse the file content as JSON first, then falls back
    to YAML parsing if JSON parsing fails.

    :param path: Path to configuration file.
    :raises GlHubError: When file cannot be loaded, parsed, or contains invalid format.
    :return: Content of configuration as dictionary.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            config = f.read()
    except OSError as exc:
        raise GlHubError(f"Can't load configuration file: {str(exc)}") from exc

    config_data: Optional[dict] = None
    try:
        config_data = json.loads(config)
    except json.JSONDecodeError:
        try:
            config_data = yaml.safe_load(config)
        except yaml.YAMLError:
            pass

    if not config_data:
        raise GlHubError(f"Can't parse configuration file: {path}")
    if not isinstance(config_data, dict):
        raise GlHubError(f"Invalid configuration file: {path}")

    return config_data


def setup_debug_logging(force: bool = False) -> bool:
    """Attach a debug stream handler to the ``glhub`` logger.

    The library itself never configures logging; this is an opt-in helper honoring
    the ``GLHUB_DEBUG`` environment variable.

    :param force: Enable debug logging even when ``GLHUB_DEBUG`` is not set.
    :return: True if the handler has been installed.
    """
    if not (GLHUB_DEBUG or force):
        return False
    root = logging.getLogger("glhub")
    if not any(getattr(h, "_glhub_debug", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
        setattr(handler, "_glhub_debug", True)
        root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    logger.debug("Debug logging enabled")
    return True
