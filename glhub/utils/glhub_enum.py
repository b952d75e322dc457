#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB enumeration with tag, label and description per member.

The wire formats decoded by this package store most enumerations as a single ASCII
byte (``'0'`` = 0x30, ``'1'`` = 0x31, ...). Members keep that byte as their ``tag``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from typing_extensions import Self

from glhub.exceptions import GlHubKeyError, GlHubTypeError, GlHubUnknownDiscriminator


@dataclass(frozen=True)
class GlHubEnumMember:
    """GLHUB Enum member representation."""

    tag: int
    label: str
    description: Optional[str] = None


class GlHubEnum(GlHubEnumMember, Enum):
    """GLHUB enhanced enumeration.

    Members compare equal to their tag and to their label, and can be looked up by
    either of them.
    """

    def __eq__(self, __value: object) -> bool:
        """Check equality of enum value with another object.

        Members of enumerations are equal only to themselves, so members of two
        different enumerations sharing a tag are not equal.

        :param __value: Object to compare with this enum value.
        :return: True if the object equals tag or label, False otherwise.
        """
        if isinstance(__value, GlHubEnum):
            return self is __value
        return self.tag == __value or self.label == __value

    def __hash__(self) -> int:
        return hash((self.tag, self.label, self.description))

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_attr(cls, attribute: Union[int, str]) -> Self:
        """Get enum member with given tag/label attribute.

        :param attribute: Tag value (int) or label value (str) of the enum member to find.
        :raises GlHubTypeError: Attribute must be either string or integer.
        :return: Found enum member matching the given attribute.
        """
        if not isinstance(attribute, (int, str)):
            raise GlHubTypeError(f"{cls.__name__} attribute must be either string or integer")
        # Let's make MyPy happy, see https://github.com/python/mypy/issues/10740
        from_tag: Callable = cls.from_tag
        from_label: Callable = cls.from_label
        from_method: Callable = from_tag if isinstance(attribute, int) else from_label
        return from_method(attribute)

    @classmethod
    def from_tag(cls, tag: int) -> Self:
        """Get enum member with given tag.

        :param tag: Tag to be used for searching
        :raises GlHubKeyError: If enum with given tag is not found
        :return: Found enum member
        """
        for item in cls.__members__.values():
            if item.tag == tag:
                return item
        raise GlHubKeyError(f"There is no {cls.__name__} item with tag {tag} defined")

    @classmethod
    def from_label(cls, label: str) -> Self:
        """Get enum member with given label (case insensitive).

        :param label: Label to be used for searching
        :raises GlHubKeyError: If enum with given label is not found or label is not string
        :return: Found enum member
        """
        if not isinstance(label, str):
            raise GlHubKeyError("Label must be string")
        for item in cls.__members__.values():
            if item.label.upper() == label.upper():
                return item
        raise GlHubKeyError(f"There is no {cls.__name__} item with label {label} defined")

    @classmethod
    def decode(cls, tag: Union[int, "GlHubEnum"], name: Optional[str] = None) -> Self:
        """Get enum member for a byte read from a binary block.

        Unlike :meth:`from_tag` the failure is reported as a parsing error, because an
        unknown byte means the block cannot be interpreted. A member of this enumeration
        is returned as is, a member of any other enumeration is never accepted.

        :param tag: Byte value read from the data.
        :param name: Name of the field holding the value.
        :raises GlHubUnknownDiscriminator: The byte does not map to any member.
        :return: Found enum member.
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, GlHubEnum) or not isinstance(tag, int):
            raise GlHubUnknownDiscriminator(cls.__name__, tag, name)
        try:
            return cls.from_tag(tag)
        except GlHubKeyError as exc:
            raise GlHubUnknownDiscriminator(cls.__name__, tag, name) from exc
