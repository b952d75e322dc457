#!/usr/bin/env python
# -*- coding: UTF-8 -*-
# Copyright 2024-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB configuration management utilities.

Decoded records can be described by a configuration dictionary (see
``get_config``/``load_from_config`` of the records). This module provides the
dictionary type used for that purpose.
"""

import logging
import os
from typing import Any, Optional, Union

import yaml
from typing_extensions import Self

from glhub import GLHUB_YML_INDENT
from glhub.exceptions import GlHubError, GlHubKeyError
from glhub.utils.misc import load_configuration, value_to_int

logger = logging.getLogger(__name__)


class Config(dict):
    """GLHUB Configuration dictionary.

    Extends the plain dictionary with nested key addressing (``"static/firmware_version"``)
    and typed getters.

    :cvar SEP: Path separator used for nested key addressing in configuration.
    """

    SEP = "/"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.config_dir = os.getcwd()
        self.config_name = ""

    @classmethod
    def create_from_file(cls, file_path: str) -> Self:
        """Create configuration object from YAML or JSON file.

        :param file_path: Path to the configuration file to load.
        :return: Configuration object with loaded data.
        """
        cfg_abs_path = os.path.abspath(file_path).replace("\\", "/")
        cfg = cls(load_configuration(cfg_abs_path))
        cfg.config_dir = os.path.dirname(cfg_abs_path)
        cfg.config_name = os.path.basename(cfg_abs_path)
        logger.debug(f"Loaded configuration {cfg.config_name} from {cfg.config_dir}")
        return cfg

    @classmethod
    def get_path(cls, key: Union[str, int]) -> list:
        """Get keypath in list format.

        :param key: Key to convert - either string path with separators or single integer.
        :return: List of path components as integers or strings.
        """
        ret: list[Union[int, str]] = []

        if isinstance(key, int):
            return [str(key)]
        for k in key.split(cls.SEP):
            try:
                ret.append(value_to_int(k))
            except GlHubError:
                ret.append(k)
        return ret

    def get(self, key: str, defaults: Optional[Any] = None) -> Any:
        """Get configuration value with nested key support.

        :param key: Key name including support of key path with '/'.
        :param defaults: Default value in case that item doesn't exist, defaults to None.
        :return: Configuration value or default if key not found.
        """
        try:
            return self.__getitem__(key)
        except GlHubError:
            return defaults

    def __getitem__(self, key: str) -> Any:
        def gets(source: Any, key_path: list) -> Any:
            key = key_path.pop(0)
            if isinstance(source, list):
                if not isinstance(key, int):
                    raise GlHubError("Invalid key path - from list must be used number as key")
                ret = source[key]
            elif isinstance(source, dict):
                ret = dict.get(source, key)
            else:
                raise GlHubError("Invalid configuration key path.")

            if ret is None:
                raise GlHubKeyError(f"The {key} doesn't exists in configuration")

            if len(key_path):
                return gets(ret, key_path)

            return ret

        try:
            return gets(self, self.get_path(key))
        except GlHubKeyError:
            return gets(self, [key])

    def __setitem__(self, key: str, value: Any) -> None:
        def sets(dest: Any, key_path: list, value: Any) -> None:
            key = key_path.pop(0)
            if isinstance(key, int):
                key = str(key)
            if len(key_path) == 0:
                dict.__setitem__(dest, key, value)
                return
            if key not in dest:
                dict.__setitem__(dest, key, {})
            sets(dest[key], key_path, value)

        sets(self, self.get_path(key), value)

    def get_config(self, key: str) -> "Config":
        """Get the sub configuration.

        :param key: Key name of the sub configuration.
        :raises GlHubError: The value is not dictionary at specified key.
        :return: Sub configuration.
        """
        ret = self.get(key)
        if not isinstance(ret, dict):
            raise GlHubError(f"The value is not dictionary at key: {key}")
        cfg = Config(ret)
        cfg.config_dir = self.config_dir
        cfg.config_name = self.config_name
        return cfg

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        """Get the key value as integer.

        :param key: Key name of the sub configuration.
        :param default: Default value if configuration doesn't contain it.
        :raises GlHubError: The value is not integer at specified key.
        :return: Integer loaded from configuration.
        """
        ret = self.get(key, default)
        if ret is None or isinstance(ret, bool):
            raise GlHubError(f"The value is not integer at key: {key}")
        return value_to_int(ret)

    def get_bytes(self, key: str, default: Optional[bytes] = None) -> bytes:
        """Get the key value as bytes.

        Strings are interpreted as hexadecimal byte dumps (leading zero bytes kept).

        :param key: Key name of the sub configuration.
        :param default: Default value if configuration doesn't contain the key.
        :raises GlHubError: When the value cannot be converted to bytes.
        :return: Bytes array loaded from configuration.
        """
        ret = self.get(key, default)
        if isinstance(ret, (bytes, bytearray)):
            return bytes(ret)
        if isinstance(ret, str):
            try:
                return bytes.fromhex(ret[2:] if ret.lower().startswith("0x") else ret)
            except ValueError as exc:
                raise GlHubError(f"The value is not hex string at key: {key}") from exc
        raise GlHubError(f"The value is not bytes at key: {key}")

    def get_str(self, key: str, default: Optional[str] = None) -> str:
        """Get the key value as string.

        :param key: Key name of the configuration entry.
        :param default: Default value to return if the key doesn't exist in configuration.
        :raises GlHubError: If the retrieved value is not a string type.
        :return: Configuration value as string.
        """
        ret = self.get(key, default)
        if not isinstance(ret, str):
            raise GlHubError(f"The value is not string at key: {key}")
        return ret

    def to_yaml(self) -> str:
        """Dump the configuration as YAML text.

        :return: YAML document.
        """
        return yaml.safe_dump(dict(self), indent=GLHUB_YML_INDENT, sort_keys=False)
