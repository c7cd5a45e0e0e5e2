from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Tuple

from .curve import G, CurvePoint, make_point, multiply
from .errors import MalformedInputError
from .primitive import (
    CURVE_ORDER,
    RandomnessSource,
    decode_scalar,
    encode_word,
    hex_decode,
    hex_encode,
    random_scalar,
)

logger = logging.getLogger(__name__)


def public_key_from_private(scalar: int) -> CurvePoint:
    return multiply(scalar, G)

def generate_ephemeral_keypair(rng: RandomnessSource) -> Tuple[int, CurvePoint]:
    scalar = random_scalar(rng)
    return scalar, public_key_from_private(scalar)

def derive_shared_secret(counterpart: CurvePoint, own_scalar: int) -> CurvePoint:
    """
    ECDH: own_scalar * counterpart.

    For scalars a, b: derive_shared_secret(b*G, a) == derive_shared_secret(a*G, b),
    which is how the auction key holder recovers the bidder's shared point
    from the ephemeral public key.
    """
    return multiply(own_scalar, counterpart)


def scalar_from_hex(s: str) -> int:
    scalar = decode_scalar(hex_decode(s))
    if scalar == 0:
        raise MalformedInputError("private scalar reduces to zero modulo the group order")
    return scalar

def scalar_to_hex(scalar: int) -> str:
    return hex_encode(encode_word(scalar % CURVE_ORDER))

def point_from_hex(x: str, y: str) -> CurvePoint:
    return make_point(hex_decode(x), hex_decode(y))

def point_to_hex(point: CurvePoint) -> Tuple[str, str]:
    return hex_encode(encode_word(point.x)), hex_encode(encode_word(point.y))


@dataclass(frozen=True)
class AuctionKeyPair:
    """Long-term key of the auction holder; bids are sealed to ``public_key``."""
    private_key: int
    public_key: CurvePoint

    @staticmethod
    def generate(rng: RandomnessSource) -> "AuctionKeyPair":
        scalar, point = generate_ephemeral_keypair(rng)
        logger.debug("generated auction key pair")
        return AuctionKeyPair(private_key=scalar, public_key=point)

    @staticmethod
    def from_private(scalar: int) -> "AuctionKeyPair":
        return AuctionKeyPair(private_key=scalar % CURVE_ORDER, public_key=public_key_from_private(scalar))

    def to_dict(self) -> Dict[str, str]:
        x, y = point_to_hex(self.public_key)
        return {
            "private_key": scalar_to_hex(self.private_key),
            "public_key_x": x,
            "public_key_y": y,
        }
