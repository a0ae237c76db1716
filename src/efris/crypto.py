"""Signing, encryption and decryption of EFRIS data blocks."""

import base64
import binascii
import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, padding, serialization
from cryptography.hazmat.primitives.asymmetric import padding as asym_padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.serialization import pkcs12

from efris.errors import DecodeFailed
from efris.models.envelope import DataBlock, DataDescription

logger = logging.getLogger("efris.crypto")

AES_BLOCK_BITS = 128


class ChannelMode(Enum):
    """How a data block's content is protected, as declared by its description flags."""
    UNENCRYPTED = "unencrypted"
    SESSION_KEY_ENCRYPTED = "session_key_encrypted"
    UNKNOWN = "unknown"

    @classmethod
    def classify(cls, description: DataDescription) -> "ChannelMode":
        if description.code_type != "1":
            return cls.UNENCRYPTED
        if description.encrypt_code == "2":
            return cls.SESSION_KEY_ENCRYPTED
        return cls.UNKNOWN


def load_private_key(path: Union[str, Path], password: Optional[str] = None) -> RSAPrivateKey:
    """
    Load the taxpayer's RSA private key.

    Args:
        path: PEM, DER or PKCS#12 (.pfx / .p12) file
        password: Key or keystore password, if any

    Returns:
        The RSA private key used for signing and for the key exchange
    """
    path = Path(path)
    data = path.read_bytes()
    secret = password.encode("utf-8") if password else None

    if path.suffix.lower() in (".pfx", ".p12"):
        key, _cert, _chain = pkcs12.load_key_and_certificates(data, secret)
    elif data.lstrip().startswith(b"-----"):
        key = serialization.load_pem_private_key(data, secret)
    else:
        key = serialization.load_der_private_key(data, secret)

    if not isinstance(key, RSAPrivateKey):
        raise ValueError(f"{path} does not hold an RSA private key")
    return key


def _unwrap(text: str) -> str:
    # MIME encoders wrap base64 at 76 columns
    return "".join(text.split())


def aes_encrypt(plaintext: bytes, key: bytes) -> str:
    """AES-ECB with PKCS#7 padding; returns base64 ciphertext."""
    padder = padding.PKCS7(AES_BLOCK_BITS).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(ciphertext).decode("ascii")


def aes_decrypt(ciphertext_b64: str, key: bytes) -> bytes:
    """Inverse of aes_encrypt."""
    ciphertext = base64.b64decode(_unwrap(ciphertext_b64), validate=True)
    decryptor = Cipher(algorithms.AES(key), modes.ECB()).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(AES_BLOCK_BITS).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


def rsa_decrypt(ciphertext: bytes, private_key: RSAPrivateKey) -> bytes:
    return private_key.decrypt(ciphertext, asym_padding.PKCS1v15())


def sign(block: DataBlock, private_key: RSAPrivateKey) -> None:
    """
    Sign the block's plaintext content (SHA1withRSA) and store the base64 signature.

    Must run before encrypt(). Empty content is left unsigned.
    """
    if not block.content:
        return
    signature = private_key.sign(block.content.encode("utf-8"), asym_padding.PKCS1v15(), hashes.SHA1())
    block.signature = base64.b64encode(signature).decode("ascii")


def verify(block: DataBlock, public_key: RSAPublicKey) -> bool:
    """Check the signature against the block's current (plaintext) content."""
    if not block.signature:
        return False
    try:
        public_key.verify(
            base64.b64decode(block.signature),
            block.content.encode("utf-8"),
            asym_padding.PKCS1v15(),
            hashes.SHA1(),
        )
        return True
    except InvalidSignature:
        return False


def encrypt(block: DataBlock, key: bytes) -> None:
    """Replace plaintext content with its session-key ciphertext and flag the channel as encrypted."""
    if not block.content:
        return
    block.content = aes_encrypt(block.content.encode("utf-8"), key)
    block.data_description.code_type = "1"
    block.data_description.encrypt_code = "2"


def encode_plain(block: DataBlock) -> None:
    """Unencrypted channel: content travels as base64 of the plaintext JSON."""
    if not block.content:
        return
    block.content = base64.b64encode(block.content.encode("utf-8")).decode("ascii")


def decrypt(block: DataBlock, key: bytes) -> None:
    """Recover plaintext content in place from a session-key encrypted block."""
    if not block.content:
        return
    try:
        block.content = aes_decrypt(block.content, key).decode("utf-8")
    except (ValueError, binascii.Error) as e:
        logger.debug("Decryption failed for content %r", block.content[:200])
        raise DecodeFailed(f"Failed to decrypt content: {e}", raw=block.content)


def decode_plain(content: str) -> str:
    """Base64 content of an unencrypted channel back to plaintext."""
    try:
        return base64.b64decode(_unwrap(content), validate=True).decode("utf-8")
    except (ValueError, binascii.Error) as e:
        raise DecodeFailed(f"Content is not valid base64 text: {e}", raw=content)
