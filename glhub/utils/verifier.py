#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB verification reports.

``verify()`` of a record never raises; it collects one :class:`VerifierRecord` per
check into a :class:`Verifier`. Reports of embedded blocks are nested as child
verifiers. A report can be printed, optionally colorized, or turned into an exception
with :meth:`Verifier.validate`.
"""

import textwrap
from dataclasses import dataclass
from typing import Any, Optional, Type, Union

import colorama

from glhub.exceptions import GlHubVerificationError
from glhub.utils.glhub_enum import GlHubEnum
from glhub.utils.misc import bytes_to_print, wrap_text


class VerifierResult(GlHubEnum):
    """Result of a single check, ordered by severity; the description holds its color."""

    SUCCEEDED = (0, "Succeeded", colorama.Fore.GREEN)
    WARNING = (1, "Warning", colorama.Fore.YELLOW)
    ERROR = (2, "Error", colorama.Fore.RED)

    def colored(self, colorize: bool = True) -> str:
        """Get label of the result.

        :param colorize: Wrap the label into ANSI color codes.
        :return: Label of the result.
        """
        if not colorize or not self.description:
            return self.label
        return f"{self.description}{self.label}{colorama.Fore.RESET}"


@dataclass
class VerifierRecord:
    """One check of the report.

    Succeeded records that are not important are hidden when the report is drawn.
    """

    name: str
    result: VerifierResult = VerifierResult.ERROR
    value: Optional[Union[str, int, bool]] = None
    important: bool = True


class Verifier:
    """Tree of verification records.

    :cvar INDENT: Indentation of nested records.
    :cvar MAX_LINE_LENGTH: Width of the drawn report.
    """

    INDENT = "  "
    MAX_LINE_LENGTH = 100

    def __init__(
        self, name: str, description: Optional[str] = None, important: bool = True
    ) -> None:
        """Create empty report.

        :param name: Name of the verified object.
        :param description: Optional text printed under the title.
        :param important: A succeeded report that is not important is drawn as one line.
        """
        self.name = name
        self.description = description
        self.important = important
        self.records: list[Union[VerifierRecord, "Verifier"]] = []

    def __repr__(self) -> str:
        return f"Verifier({self.name})"

    def __str__(self) -> str:
        return self.draw(colorize=False)

    def add_record(
        self,
        name: str,
        result: Union[VerifierResult, bool],
        value: Optional[Union[str, int, bool]] = None,
        important: bool = True,
    ) -> None:
        """Add one record.

        :param name: Name of the check.
        :param result: Result of the check, True stands for success and False for error.
        :param value: Value or message shown with the result.
        :param important: Show the record even when it succeeded.
        """
        if isinstance(result, bool):
            result = VerifierResult.SUCCEEDED if result else VerifierResult.ERROR
        self.records.append(VerifierRecord(name, result, value, important))

    def add_record_range(self, name: str, value: Any, max_val: int, min_val: int = 0) -> None:
        """Add check of an integer value range.

        :param name: Name of the check.
        :param value: Checked value.
        :param max_val: Highest allowed value.
        :param min_val: Lowest allowed value.
        """
        if not isinstance(value, int) or isinstance(value, bool):
            self.add_record(name, VerifierResult.ERROR, f"Not an integer: {value!r}")
        elif not min_val <= value <= max_val:
            self.add_record(
                name,
                VerifierResult.ERROR,
                f"0x{value:X} out of range <0x{min_val:X}, 0x{max_val:X}>",
            )
        else:
            self.add_record(name, VerifierResult.SUCCEEDED, f"0x{value:X}")

    def add_record_bytes(self, name: str, value: Any, length: int) -> None:
        """Add check of a fixed length byte array.

        :param name: Name of the check.
        :param value: Checked value.
        :param length: Required length in bytes.
        """
        if not isinstance(value, (bytes, bytearray)):
            self.add_record(name, VerifierResult.ERROR, f"Not a byte array: {value!r}")
        elif len(value) != length:
            self.add_record(
                name, VerifierResult.ERROR, f"Length {len(value)} differs from {length} bytes"
            )
        else:
            self.add_record(name, VerifierResult.SUCCEEDED, bytes_to_print(bytes(value)))

    def add_record_enum(self, name: str, value: Any, enum: Type[GlHubEnum]) -> None:
        """Add check that the value is a member of the enumeration.

        Raw tags or members of other enumerations are reported as errors.

        :param name: Name of the check.
        :param value: Checked value.
        :param enum: Required enumeration.
        """
        if isinstance(value, enum):
            self.add_record(name, VerifierResult.SUCCEEDED, value.label)
        else:
            self.add_record(name, VerifierResult.ERROR, f"{value!r} is not {enum.__name__}")

    def add_child(self, child: "Verifier", prefix_name: Optional[str] = None) -> None:
        """Nest report of an embedded object.

        :param child: Nested report.
        :param prefix_name: Prefix of the nested report name.
        """
        if prefix_name:
            child.name = f"{prefix_name}: {child.name}"
        self.records.append(child)

    @property
    def result(self) -> VerifierResult:
        """The most severe result of all records, including nested reports."""
        return max(
            (record.result for record in self.records),
            key=lambda res: res.tag,
            default=VerifierResult.SUCCEEDED,
        )

    @property
    def has_errors(self) -> bool:
        """True when any record failed."""
        return self.result == VerifierResult.ERROR

    def get_count(self, results: Optional[list[VerifierResult]] = None) -> int:
        """Count records, nested reports included.

        :param results: Count only records of these results, all records by default.
        :return: Number of records.
        """
        count = 0
        for record in self.records:
            if isinstance(record, Verifier):
                count += record.get_count(results)
            elif results is None or record.result in results:
                count += 1
        return count

    def _draw_record(self, record: VerifierRecord, colorize: bool) -> str:
        text = f"{record.name}({record.result.colored(colorize)}): "
        if record.value is not None:
            text += str(record.value)
        return "\n".join(
            textwrap.wrap(text, self.MAX_LINE_LENGTH, subsequent_indent=self.INDENT * 2)
        )

    def draw(self, results: Optional[list[VerifierResult]] = None, colorize: bool = True) -> str:
        """Draw the report.

        :param results: Draw only records of these results, all records by default.
        :param colorize: Use ANSI colors.
        :return: Report text.
        """
        if results and self.result not in results:
            return ""
        title_color = colorama.Fore.CYAN if colorize else ""
        reset = colorama.Fore.RESET if colorize else ""
        ret = f"{title_color}{self.name}{reset}({self.result.colored(colorize)})\n"
        if self.result == VerifierResult.SUCCEEDED and not self.important:
            return ret
        if self.description:
            ret += textwrap.indent(wrap_text(self.description, self.MAX_LINE_LENGTH), self.INDENT)
            ret += "\n"
        for record in self.records:
            if isinstance(record, Verifier):
                text = record.draw(results, colorize)
            elif (results and record.result not in results) or (
                record.result == VerifierResult.SUCCEEDED and not record.important
            ):
                continue
            else:
                text = self._draw_record(record, colorize) + "\n"
            ret += textwrap.indent(text, self.INDENT)
        return ret

    def validate(self) -> None:
        """Raise if the report holds an error.

        :raises GlHubVerificationError: Report of the failed records.
        """
        if self.has_errors:
            raise GlHubVerificationError(
                self.draw(results=[VerifierResult.ERROR], colorize=False)
            )
