#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB abstract base classes for common functionality."""

from abc import ABC, abstractmethod
from typing import Any

from typing_extensions import Self


########################################################################################################################
# Abstract Class for Data Classes
########################################################################################################################
class BaseClass(ABC):
    """GLHUB abstract base class for serializable data objects.

    This class defines the binary contract of every decoded block: it can be parsed
    from bytes and exported back into the very same bytes.
    """

    def __eq__(self, obj: Any) -> bool:
        """Check object equality.

        :param obj: Object to compare with this instance.
        :return: True if objects are equal, False otherwise.
        """
        return isinstance(obj, self.__class__) and vars(obj) == vars(self)

    def __ne__(self, obj: Any) -> bool:
        return not self.__eq__(obj)

    @abstractmethod
    def __repr__(self) -> str:
        """Get string representation of the object.

        :return: String representation of the object.
        """

    @abstractmethod
    def __str__(self) -> str:
        """Get string representation of the object.

        :return: Object description in string format.
        """

    @abstractmethod
    def export(self) -> bytes:
        """Export object into bytes array.

        :return: Object representation as bytes.
        """

    @classmethod
    @abstractmethod
    def parse(cls, data: bytes, offset: int = 0) -> Self:
        """Parse object from bytes array.

        :param data: Byte array containing the serialized object data.
        :param offset: Offset of the object in the data.
        :return: Parsed object instance.
        """
