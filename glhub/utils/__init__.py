#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB utilities package.

Field codec, declarative fixed layout records, enumerations, verification reports
and configuration helpers shared by the decoders.
"""
