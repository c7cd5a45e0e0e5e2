"""
RSA-OAEP (SHA-256, MGF1-SHA-256, string label) companion to the ECIES path.

Keys arrive as raw big-endian components, the way the auction contract stores
them. The private key is rebuilt from (n, e, d) alone; the primes are
recovered from those.

Encryption takes the 32-byte OAEP seed from the caller so a ciphertext can be
reproduced byte for byte; decryption hands the seed back next to the message.
"""

import logging
from typing import Optional, Tuple

from Crypto.Cipher import PKCS1_OAEP
from Crypto.Hash import SHA256
from Crypto.PublicKey import RSA
from Crypto.Signature.pss import MGF1
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .errors import MalformedInputError
from .primitive import hex_decode, hex_encode

logger = logging.getLogger(__name__)

SEED_SIZE = SHA256.digest_size


def _oaep(label: str) -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=label.encode("utf-8") or None,
    )

def public_key_from_components(public_exponent: int, modulus: int) -> rsa.RSAPublicKey:
    try:
        return rsa.RSAPublicNumbers(public_exponent, modulus).public_key()
    except ValueError as e:
        raise MalformedInputError(f"invalid RSA public key: {e}")

def private_key_from_components(public_exponent: int, private_exponent: int, modulus: int) -> rsa.RSAPrivateKey:
    try:
        p, q = rsa.rsa_recover_prime_factors(modulus, public_exponent, private_exponent)
        numbers = rsa.RSAPrivateNumbers(
            p=p,
            q=q,
            d=private_exponent,
            dmp1=rsa.rsa_crt_dmp1(private_exponent, p),
            dmq1=rsa.rsa_crt_dmq1(private_exponent, q),
            iqmp=rsa.rsa_crt_iqmp(p, q),
            public_numbers=rsa.RSAPublicNumbers(public_exponent, modulus),
        )
        return numbers.private_key()
    except ValueError as e:
        raise MalformedInputError(f"invalid RSA private key: {e}")


def rsa_encrypt(
    message: bytes,
    label: str,
    public_exponent: int,
    modulus: int,
    seed: Optional[bytes] = None,
) -> bytes:
    """
    OAEP-encrypt ``message`` under the raw public key (e, n).

    Args:
        seed: 32-byte OAEP seed. Same seed, same inputs, same ciphertext.
              Drawn from the OS CSPRNG when omitted.
    """
    if seed is not None and len(seed) != SEED_SIZE:
        raise MalformedInputError(f"OAEP seed must be {SEED_SIZE} bytes, got {len(seed)}")
    # validates (e, n) the same way decryption will
    public_key_from_components(public_exponent, modulus)

    options = {"hashAlgo": SHA256, "label": label.encode("utf-8")}
    if seed is not None:
        options["randfunc"] = lambda size: seed
    try:
        key = RSA.construct((modulus, public_exponent))
        return PKCS1_OAEP.new(key, **options).encrypt(message)
    except ValueError as e:
        raise MalformedInputError(f"RSA-OAEP encryption failed: {e}")

def _recover_seed(ciphertext: bytes, private_exponent: int, modulus: int) -> bytes:
    # EM = 0x00 || maskedSeed || maskedDB, seed = maskedSeed XOR MGF1(maskedDB)
    k = (modulus.bit_length() + 7) // 8
    em = pow(int.from_bytes(ciphertext, "big"), private_exponent, modulus).to_bytes(k, "big")
    masked_seed, masked_db = em[1:1 + SEED_SIZE], em[1 + SEED_SIZE:]
    seed_mask = MGF1(masked_db, SEED_SIZE, SHA256)
    return bytes(a ^ b for a, b in zip(masked_seed, seed_mask))

def rsa_decrypt(
    ciphertext: bytes,
    label: str,
    public_exponent: int,
    private_exponent: int,
    modulus: int,
) -> Tuple[bytes, bytes]:
    """Open an OAEP ciphertext; returns ``(message, seed)``."""
    private_key = private_key_from_components(public_exponent, private_exponent, modulus)
    try:
        message = private_key.decrypt(ciphertext, _oaep(label))
    except ValueError:
        raise MalformedInputError("RSA-OAEP decryption failed")
    return message, _recover_seed(ciphertext, private_exponent, modulus)


def encrypt_hex(message: str, label: str, public_exponent: str, modulus: str, seed: Optional[str] = None) -> str:
    ciphertext = rsa_encrypt(
        hex_decode(message),
        label,
        int.from_bytes(hex_decode(public_exponent), "big"),
        int.from_bytes(hex_decode(modulus), "big"),
        seed=hex_decode(seed) if seed is not None else None,
    )
    logger.debug("rsa-oaep sealed %d bytes", len(ciphertext))
    return hex_encode(ciphertext)

def decrypt_hex(ciphertext: str, label: str, public_exponent: str, private_exponent: str, modulus: str) -> str:
    """Hex of ``message || seed``."""
    message, seed = rsa_decrypt(
        hex_decode(ciphertext),
        label,
        int.from_bytes(hex_decode(public_exponent), "big"),
        int.from_bytes(hex_decode(private_exponent), "big"),
        int.from_bytes(hex_decode(modulus), "big"),
    )
    return hex_encode(message + seed)
