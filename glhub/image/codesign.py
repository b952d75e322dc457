#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2025 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Codesign information blocks and public keys.

RSA codesign information::

    +------+------+------------------------------------------+
    |Off   | Size | Field                                    |
    +------+------+------------------------------------------+
    |0x000 |   4  | 'N = ' (0x4E203D20)                      |
    |0x004 | 512  | Modulus N as hexadecimal text            |
    |0x204 |   2  | CR LF (0x0D0A)                           |
    |0x206 |   4  | 'E = ' (0x45203D20)                      |
    |0x20A |   6  | Exponent E as hexadecimal text           |
    |0x210 |   2  | CR LF (0x0D0A)                           |
    |0x212 | 256  | Signature                                |
    +------+------+------------------------------------------+

ECDSA codesign information is a plain 32 bytes hash, 64 bytes public key (X || Y) and
64 bytes signature (R || S).
"""

import logging
import string
from dataclasses import dataclass
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa, utils

from glhub.exceptions import GlHubMalformedCodesign, GlHubUnsupportedVariant, GlHubValueError
from glhub.utils.fields import Buffer, Field, FieldKind
from glhub.utils.glhub_enum import GlHubEnum
from glhub.utils.misc import Endianness
from glhub.utils.structs import FixedStruct
from glhub.utils.verifier import Verifier, VerifierResult

logger = logging.getLogger(__name__)

TAG_N = 0x4E203D20  # 'N = '
TAG_E = 0x45203D20  # 'E = '
END_OF_LINE = 0x0D0A  # CR LF

RSA_MODULUS_TEXT_SIZE = 512
RSA_EXPONENT_TEXT_SIZE = 6
RSA_SIGNATURE_SIZE = 256
ECDSA_HASH_SIZE = 32
ECDSA_KEY_SIZE = 64
ECDSA_SIGNATURE_SIZE = 64


class FwCodesign(GlHubEnum):
    """Codesign scheme of a firmware image."""

    NONE = (0, "None", "Firmware is not codesigned")
    RSA = (1, "Rsa", "RSA codesign")
    ECDSA = (2, "Ecdsa", "ECDSA codesign")


def _rsa_key_fields() -> tuple[Field, ...]:
    return (
        Field("tag_n", 4, FieldKind.UINT, constant=TAG_N.to_bytes(4, Endianness.BIG.value)),
        Field("text_n", RSA_MODULUS_TEXT_SIZE, FieldKind.CHARS),
        Field("end_n", 2, FieldKind.UINT, constant=END_OF_LINE.to_bytes(2, Endianness.BIG.value)),
        Field("tag_e", 4, FieldKind.UINT, constant=TAG_E.to_bytes(4, Endianness.BIG.value)),
        Field("text_e", RSA_EXPONENT_TEXT_SIZE, FieldKind.CHARS),
        Field("end_e", 2, FieldKind.UINT, constant=END_OF_LINE.to_bytes(2, Endianness.BIG.value)),
    )


@dataclass(frozen=True, repr=False)
class RsaPublicKeyText(FixedStruct):
    """RSA public key in its textual 'N = ...' / 'E = ...' form."""

    NAME = "RSA public key"
    CONSTANT_ERROR = GlHubMalformedCodesign
    FIELDS = _rsa_key_fields()

    tag_n: int = TAG_N
    text_n: str = "0" * RSA_MODULUS_TEXT_SIZE
    end_n: int = END_OF_LINE
    tag_e: int = TAG_E
    text_e: str = "010001"
    end_e: int = END_OF_LINE

    @property
    def modulus(self) -> int:
        """Modulus N."""
        return self._text_to_int("text_n", self.text_n)

    @property
    def exponent(self) -> int:
        """Public exponent E."""
        return self._text_to_int("text_e", self.text_e)

    @staticmethod
    def _text_to_int(name: str, text: str) -> int:
        # only plain hex digits, int() would also take spaces, '0x' and '_'
        if not isinstance(text, str) or not text or any(c not in string.hexdigits for c in text):
            raise GlHubValueError(f"Field {name} is not a hexadecimal number: '{text}'")
        return int(text, 16)

    def get_public_key(self) -> rsa.RSAPublicKey:
        """Recreate the public key.

        :raises GlHubValueError: The texts do not form a valid RSA public key.
        :return: RSA public key.
        """
        try:
            return rsa.RSAPublicNumbers(e=self.exponent, n=self.modulus).public_key()
        except ValueError as exc:
            raise GlHubValueError(f"Cannot recreate the public key: {str(exc)}") from exc

    def verify(self) -> Verifier:
        """Get verification report of the key, the key is recreated as a part of it.

        :return: Verifier of the key.
        """
        ret = super().verify()
        try:
            key = self.get_public_key()
        except GlHubValueError as exc:
            ret.add_record("Public key", VerifierResult.ERROR, exc.description)
        else:
            ret.add_record("Public key", VerifierResult.SUCCEEDED, f"RSA{key.key_size}")
        return ret

    def same_public_key(self, other: Union["RsaPublicKeyText", "CodesignInfoRsa"]) -> bool:
        """Compare public key with the key of other block.

        :param other: RSA public key or RSA codesign block.
        :return: True if both blocks hold the same key.
        """
        return self.text_n == other.text_n and self.text_e == other.text_e


@dataclass(frozen=True, repr=False)
class CodesignInfoRsa(RsaPublicKeyText):
    """RSA codesign information: textual public key followed by the signature."""

    NAME = "RSA codesign information"
    FIELDS = _rsa_key_fields() + (Field("signature", RSA_SIGNATURE_SIZE),)

    signature: bytes = bytes(RSA_SIGNATURE_SIZE)

    @property
    def public_key_text(self) -> RsaPublicKeyText:
        """Public key part of the block."""
        return RsaPublicKeyText(
            tag_n=self.tag_n,
            text_n=self.text_n,
            end_n=self.end_n,
            tag_e=self.tag_e,
            text_e=self.text_e,
            end_e=self.end_e,
        )

    def verify(self) -> Verifier:
        """Get verification report with the public key report nested.

        :return: Verifier of the block.
        """
        ret = Verifier(self.NAME)
        ret.add_child(self.public_key_text.verify())
        ret.add_record_bytes("signature", self.signature, RSA_SIGNATURE_SIZE)
        return ret


@dataclass(frozen=True, repr=False)
class EcdsaPublicKey(FixedStruct):
    """Raw ECDSA P-256 public key (X || Y)."""

    NAME = "ECDSA public key"
    FIELDS = (Field("key", ECDSA_KEY_SIZE),)

    key: bytes = bytes(ECDSA_KEY_SIZE)

    def get_public_key(self) -> ec.EllipticCurvePublicKey:
        """Recreate the public key.

        :raises GlHubValueError: The key is not a point of the P-256 curve.
        :return: ECC public key.
        """
        try:
            return ec.EllipticCurvePublicKey.from_encoded_point(
                ec.SECP256R1(), b"\x04" + self.key
            )
        except ValueError as exc:
            raise GlHubValueError(f"Cannot recreate the public key: {str(exc)}") from exc

    def verify(self) -> Verifier:
        ret = super().verify()
        if ret.has_errors:
            return ret
        try:
            self.get_public_key()
        except GlHubValueError as exc:
            ret.add_record("Public key", VerifierResult.ERROR, exc.description)
        else:
            ret.add_record("Public key", VerifierResult.SUCCEEDED, "Point of the P-256 curve")
        return ret

    def same_public_key(self, other: Union["EcdsaPublicKey", "CodesignInfoEcdsa"]) -> bool:
        """Compare public key with the key of other block.

        :param other: ECDSA public key or ECDSA codesign block.
        :return: True if both blocks hold the same key.
        """
        return self.key == other.key


@dataclass(frozen=True, repr=False)
class CodesignInfoEcdsa(FixedStruct):
    """ECDSA codesign information."""

    NAME = "ECDSA codesign information"
    FIELDS = (
        Field("hash", ECDSA_HASH_SIZE),
        Field("key", ECDSA_KEY_SIZE),
        Field("signature", ECDSA_SIGNATURE_SIZE),
    )

    hash: bytes = bytes(ECDSA_HASH_SIZE)
    key: bytes = bytes(ECDSA_KEY_SIZE)
    signature: bytes = bytes(ECDSA_SIGNATURE_SIZE)

    @property
    def public_key(self) -> EcdsaPublicKey:
        """Public key part of the block."""
        return EcdsaPublicKey(key=self.key)

    def verify_signature(self) -> bool:
        """Check the signature of the SHA-256 hash against the public key of the block.

        :raises GlHubValueError: The public key is invalid.
        :return: True if the signature is valid.
        """
        half = ECDSA_SIGNATURE_SIZE // 2
        der_signature = utils.encode_dss_signature(
            int.from_bytes(self.signature[:half], Endianness.BIG.value),
            int.from_bytes(self.signature[half:], Endianness.BIG.value),
        )
        try:
            self.public_key.get_public_key().verify(
                der_signature, self.hash, ec.ECDSA(utils.Prehashed(hashes.SHA256()))
            )
            return True
        except InvalidSignature:
            return False

    def verify(self) -> Verifier:
        """Get verification report, the signature is checked once the key is valid.

        :return: Verifier of the block.
        """
        ret = Verifier(self.NAME)
        ret.add_record_bytes("hash", self.hash, ECDSA_HASH_SIZE)
        ret.add_child(self.public_key.verify())
        ret.add_record_bytes("signature", self.signature, ECDSA_SIGNATURE_SIZE)
        if ret.has_errors:
            ret.add_record("Signature check", VerifierResult.WARNING, "Skipped")
        else:
            ret.add_record("Signature check", self.verify_signature())
        return ret


AnyCodesignInfo = Union[CodesignInfoRsa, CodesignInfoEcdsa]


def decode_codesign_rsa(data: Buffer, offset: int = 0) -> CodesignInfoRsa:
    """Decode RSA codesign information.

    The whole block must be present; then the literals are checked in wire order.

    :param data: Source buffer.
    :param offset: Offset of the block.
    :raises GlHubBufferTooShort: The buffer does not hold the whole block.
    :raises GlHubMalformedCodesign: A tag or terminator does not match, the exception
        names the failing field.
    :return: Decoded block.
    """
    return CodesignInfoRsa.parse(data, offset)


def decode_codesign_ecdsa(data: Buffer, offset: int = 0) -> CodesignInfoEcdsa:
    """Decode ECDSA codesign information.

    :param data: Source buffer.
    :param offset: Offset of the block.
    :raises GlHubBufferTooShort: The buffer does not hold the whole block.
    :return: Decoded block.
    """
    return CodesignInfoEcdsa.parse(data, offset)


def decode_rsa_public_key(data: Buffer, offset: int = 0) -> RsaPublicKeyText:
    """Decode RSA public key text.

    :param data: Source buffer.
    :param offset: Offset of the block.
    :raises GlHubBufferTooShort: The buffer does not hold the whole block.
    :raises GlHubMalformedCodesign: A tag or terminator does not match.
    :return: Decoded key.
    """
    return RsaPublicKeyText.parse(data, offset)


def decode_ecdsa_public_key(data: Buffer, offset: int = 0) -> EcdsaPublicKey:
    """Decode raw ECDSA public key.

    :param data: Source buffer.
    :param offset: Offset of the block.
    :raises GlHubBufferTooShort: The buffer does not hold the whole block.
    :return: Decoded key.
    """
    return EcdsaPublicKey.parse(data, offset)


def decode_codesign(data: Buffer, codesign: FwCodesign, offset: int = 0) -> AnyCodesignInfo:
    """Decode codesign information of the given scheme.

    :param data: Source buffer.
    :param codesign: Codesign scheme of the firmware.
    :param offset: Offset of the block.
    :raises GlHubUnsupportedVariant: The firmware is not codesigned.
    :return: Decoded block.
    """
    logger.debug(f"Decoding {codesign.label} codesign information at offset {offset}")
    if codesign == FwCodesign.RSA:
        return decode_codesign_rsa(data, offset)
    if codesign == FwCodesign.ECDSA:
        return decode_codesign_ecdsa(data, offset)
    raise GlHubUnsupportedVariant("codesign", codesign)
