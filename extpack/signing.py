# extpack/signing.py
from __future__ import annotations
import hashlib

from cryptography.hazmat.primitives.serialization import (
    Encoding,
    PublicFormat,
    load_pem_private_key,
)

from extpack.core.errors import SigningKeyError

__all__ = ["publicKeyDer", "extensionIdFromKey"]



def publicKeyDer(pem: str | bytes) -> bytes:
    """DER SubjectPublicKeyInfo of the public half of an unencrypted PEM private key."""
    data = pem.encode("utf-8") if isinstance(pem, str) else pem
    try:
        privateKey = load_pem_private_key(data, password=None)
    except (ValueError, TypeError) as err:
        raise SigningKeyError(f"Signing key is not a readable PEM private key: {err}") from err
    return privateKey.public_key().public_bytes(encoding=Encoding.DER, format=PublicFormat.SubjectPublicKeyInfo)



def extensionIdFromKey(pem: str | bytes) -> str:
    """
    Derives the Chromium extension ID for a signing key.

    The ID is the first 16 bytes of SHA-256(public key DER), each nibble
    mapped onto 'a'..'p', high nibble first. Loading the unpacked extension
    with this key always yields the same ID.
    """
    digest = hashlib.sha256(publicKeyDer(pem)).digest()[:16]
    out: list[str] = []
    for byte in digest:
        out.append(chr(ord("a") + (byte >> 4)))
        out.append(chr(ord("a") + (byte & 0x0F)))
    return "".join(out)
