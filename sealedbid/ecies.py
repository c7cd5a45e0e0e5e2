"""
ECIES over BN254 for sealed auction bids.

Encrypt (bidder side):
1. validate the auction public key
2. draw (or take) an ephemeral scalar e, bid public key E = e*G
3. shared point S = e*P, symmetric key K = keccak256(BE32(S.x) || BE32(salt))
4. ciphertext = plaintext XOR K, serialized with E in the contract layout

Decrypt (auction holder side, direct variant only):
S = k*E for the auction private key k, same K, plaintext = ciphertext XOR K.

The hex-level ``encrypt`` / ``decrypt`` raise on the first error. The
``try_*`` variants return an ``Outcome`` instead, so a batch caller can decide
whether one bad bid stops the rest.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .bundle import EncryptedBid
from .cipher import Variant, get_cipher
from .config import get_settings
from .curve import CurvePoint, multiply, G
from .errors import SealedBidError
from .kdf import derive_symmetric_key
from .keys import (
    derive_shared_secret,
    generate_ephemeral_keypair,
    point_from_hex,
    scalar_from_hex,
)
from .primitive import (
    RandomnessSource,
    SystemRandomness,
    decode_scalar,
    decode_uint,
    hex_decode,
    hex_encode,
)

logger = logging.getLogger(__name__)


def encrypt_bid(
    message: int,
    recipient: CurvePoint,
    salt: int,
    variant: Optional[Variant] = None,
    rng: Optional[RandomnessSource] = None,
    ephemeral_scalar: Optional[int] = None,
) -> EncryptedBid:
    """
    Seal ``message`` to the auction key ``recipient``.

    Args:
        message: bid value (128 bits for MASKED, 256 bits for DIRECT)
        recipient: auction public key, already validated
        salt: 256-bit public domain separator
        variant: cipher layout; defaults to SEALEDBID_VARIANT
        rng: entropy for the ephemeral scalar and the mask; a fresh
            SystemRandomness when omitted
        ephemeral_scalar: fixed ephemeral scalar for reproducible vectors

    Returns:
        EncryptedBid carrying the ciphertext and the bid public key
    """
    variant = Variant.parse(variant) if variant is not None else get_settings().variant
    rng = rng if rng is not None else SystemRandomness()
    cipher = get_cipher(variant)
    # mask (if any) is drawn before the ephemeral scalar
    plaintext = cipher.prepare(message, rng)

    if ephemeral_scalar is None:
        ephemeral_scalar, bid_public_key = generate_ephemeral_keypair(rng)
    else:
        bid_public_key = multiply(ephemeral_scalar, G)

    shared = derive_shared_secret(recipient, ephemeral_scalar)
    key = derive_symmetric_key(shared, salt)
    ciphertext = cipher.seal(plaintext, key)
    logger.debug("sealed %s bid to %r", variant.value, recipient)

    return EncryptedBid(ciphertext=ciphertext, bid_public_key=bid_public_key, variant=variant)


def decrypt_bid(
    ciphertext: bytes,
    bid_public_key: CurvePoint,
    private_key: int,
    salt: int,
    variant: Variant = Variant.DIRECT,
) -> bytes:
    """Recover the 32-byte plaintext of a bid sealed to ``private_key * G``."""
    cipher = get_cipher(variant)
    shared = derive_shared_secret(bid_public_key, private_key)
    key = derive_symmetric_key(shared, salt)
    plaintext = cipher.decrypt(ciphertext, key)
    logger.debug("opened %s bid from %r", cipher.variant.value, bid_public_key)
    return plaintext


def encrypt(
    message: str,
    public_key_x: str,
    public_key_y: str,
    salt: str,
    variant: Optional[Variant] = None,
    ephemeral_key: Optional[str] = None,
    rng: Optional[RandomnessSource] = None,
) -> str:
    """Hex in, ``0x`` hex out, in the contract's layout for ``variant``."""
    # off-curve keys are rejected before anything else is decoded
    recipient = point_from_hex(public_key_x, public_key_y)
    variant = Variant.parse(variant) if variant is not None else get_settings().variant
    bid = encrypt_bid(
        message=decode_uint(hex_decode(message), get_cipher(variant).message_bits),
        recipient=recipient,
        salt=decode_uint(hex_decode(salt), 256),
        variant=variant,
        rng=rng,
        ephemeral_scalar=decode_scalar(hex_decode(ephemeral_key)) if ephemeral_key is not None else None,
    )
    return bid.to_hex()


def decrypt(
    ciphertext: str,
    bid_public_key_x: str,
    bid_public_key_y: str,
    private_key: str,
    salt: str,
    variant: Variant = Variant.DIRECT,
) -> str:
    """Hex in, ``0x`` hex of the 32-byte recovered bid out."""
    bid_public_key = point_from_hex(bid_public_key_x, bid_public_key_y)
    plaintext = decrypt_bid(
        ciphertext=hex_decode(ciphertext),
        bid_public_key=bid_public_key,
        private_key=scalar_from_hex(private_key),
        salt=decode_uint(hex_decode(salt), 256),
        variant=variant,
    )
    return hex_encode(plaintext)


@dataclass(frozen=True)
class Outcome:
    value: Optional[str] = None
    error: Optional[SealedBidError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.value


@dataclass(frozen=True)
class EncryptRequest:
    message: str
    public_key_x: str
    public_key_y: str
    salt: str
    ephemeral_key: Optional[str] = None


def try_encrypt(*args, **kwargs) -> Outcome:
    try:
        return Outcome(value=encrypt(*args, **kwargs))
    except SealedBidError as e:
        logger.debug("encrypt failed: %s", e.describe())
        return Outcome(error=e)


def try_decrypt(*args, **kwargs) -> Outcome:
    try:
        return Outcome(value=decrypt(*args, **kwargs))
    except SealedBidError as e:
        logger.debug("decrypt failed: %s", e.describe())
        return Outcome(error=e)


def encrypt_many(
    requests: Iterable[EncryptRequest],
    variant: Optional[Variant] = None,
    rng: Optional[RandomnessSource] = None,
) -> List[Outcome]:
    """Encrypt each request independently; a failed bid does not stop the batch."""
    return [
        try_encrypt(
            r.message,
            r.public_key_x,
            r.public_key_y,
            r.salt,
            variant=variant,
            ephemeral_key=r.ephemeral_key,
            rng=rng,
        )
        for r in requests
    ]
