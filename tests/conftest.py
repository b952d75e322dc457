#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""GLHUB pytest configuration and shared test fixtures.

This module provides test data shared by the decoder tests: tool string blocks
and codesign blocks built from freshly generated keys.
"""

import os

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa, utils

os.environ["GLHUB_DEBUG"] = "False"

STATIC_BLOCK = (
    b"3"  # tool string version
    b"0501"  # mask project code
    b"0"  # mask project hardware
    b"01"  # mask project firmware
    b"352310"  # mask project IC type
    b"0601"  # running project code
    b"1"  # running project hardware
    b"02"  # running project firmware
    b"359021"  # running project IC type
    b"0123"  # firmware version
)

DYNAMIC_COMMON = b"M4455A0F3"


@pytest.fixture
def static_data() -> bytes:
    """Get tool string static block (31 bytes).

    :return: Static block with tool string version '3'.
    """
    return STATIC_BLOCK


@pytest.fixture
def dynamic_common() -> bytes:
    """Get the nine characters shared by all dynamic blocks.

    :return: Common part of dynamic block.
    """
    return DYNAMIC_COMMON


@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    """Generate RSA 2048 private key shared by the session.

    :return: RSA private key.
    """
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key() -> ec.EllipticCurvePrivateKey:
    """Generate P-256 private key shared by the session.

    :return: ECC private key.
    """
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def rsa_codesign_data(rsa_key: rsa.RSAPrivateKey) -> bytes:
    """Get RSA codesign block holding the public key of ``rsa_key``.

    :param rsa_key: RSA private key.
    :return: 786 bytes RSA codesign block.
    """
    numbers = rsa_key.public_key().public_numbers()
    return (
        b"N = "
        + f"{numbers.n:0512X}".encode("ascii")
        + b"\r\n"
        + b"E = "
        + f"{numbers.e:06X}".encode("ascii")
        + b"\r\n"
        + bytes(range(256))
    )


@pytest.fixture
def ecdsa_codesign_data(ec_key: ec.EllipticCurvePrivateKey) -> bytes:
    """Get ECDSA codesign block with a valid signature made by ``ec_key``.

    :param ec_key: ECC private key.
    :return: 160 bytes ECDSA codesign block.
    """
    digest = hashes.Hash(hashes.SHA256())
    digest.update(b"hub firmware image")
    hash_value = digest.finalize()
    r, s = utils.decode_dss_signature(
        ec_key.sign(hash_value, ec.ECDSA(utils.Prehashed(hashes.SHA256())))
    )
    numbers = ec_key.public_key().public_numbers()
    return (
        hash_value
        + numbers.x.to_bytes(32, "big")
        + numbers.y.to_bytes(32, "big")
        + r.to_bytes(32, "big")
        + s.to_bytes(32, "big")
    )
