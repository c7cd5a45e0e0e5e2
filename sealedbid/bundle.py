from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from .cipher import Variant
from .curve import CurvePoint, make_point
from .errors import MalformedInputError
from .keys import point_from_hex, point_to_hex
from .primitive import WORD_SIZE, hex_decode, hex_encode

# offset word consumed by the contract's abi decoder, layout A only
OFFSET_MARKER = b"\x40"

CIPHERTEXT_SIZE = WORD_SIZE
MASKED_LAYOUT_SIZE = CIPHERTEXT_SIZE + len(OFFSET_MARKER) + 2 * WORD_SIZE
DIRECT_LAYOUT_SIZE = CIPHERTEXT_SIZE + 2 * WORD_SIZE


@dataclass(frozen=True)
class EncryptedBid:
    ciphertext: bytes
    bid_public_key: CurvePoint
    variant: Variant

    def to_bytes(self) -> bytes:
        if self.variant == Variant.MASKED:
            return pack_masked(self.ciphertext, self.bid_public_key)
        return pack_direct(self.ciphertext, self.bid_public_key)

    def to_hex(self) -> str:
        return hex_encode(self.to_bytes())

    def to_dict(self) -> Dict[str, Any]:
        x, y = point_to_hex(self.bid_public_key)
        return {
            "variant": self.variant.value,
            "ciphertext": hex_encode(self.ciphertext),
            "bid_public_key_x": x,
            "bid_public_key_y": y,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "EncryptedBid":
        return EncryptedBid(
            ciphertext=hex_decode(d["ciphertext"]),
            bid_public_key=point_from_hex(d["bid_public_key_x"], d["bid_public_key_y"]),
            variant=Variant.parse(d["variant"]),
        )


def _check_ciphertext(ciphertext: bytes) -> None:
    if len(ciphertext) != CIPHERTEXT_SIZE:
        raise MalformedInputError(f"ciphertext must be {CIPHERTEXT_SIZE} bytes, got {len(ciphertext)}")

def pack_masked(ciphertext: bytes, bid_public_key: CurvePoint) -> bytes:
    _check_ciphertext(ciphertext)
    return ciphertext + OFFSET_MARKER + bid_public_key.to_bytes()

def pack_direct(ciphertext: bytes, bid_public_key: CurvePoint) -> bytes:
    _check_ciphertext(ciphertext)
    return ciphertext + bid_public_key.to_bytes()


def parse_bid(data: bytes) -> EncryptedBid:
    """
    Inverse of pack_masked / pack_direct. The layout is told apart by length;
    anything else is rejected, and the embedded key must be on the curve.
    """
    if len(data) == MASKED_LAYOUT_SIZE:
        marker = data[CIPHERTEXT_SIZE:CIPHERTEXT_SIZE + 1]
        if marker != OFFSET_MARKER:
            raise MalformedInputError(f"expected offset marker 0x40, got 0x{marker.hex()}")
        variant = Variant.MASKED
        key_bytes = data[CIPHERTEXT_SIZE + 1:]
    elif len(data) == DIRECT_LAYOUT_SIZE:
        variant = Variant.DIRECT
        key_bytes = data[CIPHERTEXT_SIZE:]
    else:
        raise MalformedInputError(
            f"encrypted bid must be {MASKED_LAYOUT_SIZE} or {DIRECT_LAYOUT_SIZE} bytes, got {len(data)}"
        )
    return EncryptedBid(
        ciphertext=data[:CIPHERTEXT_SIZE],
        bid_public_key=make_point(key_bytes[:WORD_SIZE], key_bytes[WORD_SIZE:]),
        variant=variant,
    )

def parse_bid_hex(s: str) -> EncryptedBid:
    return parse_bid(hex_decode(s))
