"""
BN254 (alt_bn128) G1 arithmetic.

Curve: y^2 = x^3 + 3 over Fp, generator G = (1, 2), prime order r, cofactor 1.
Points are affine; the point at infinity is represented by ``None`` and only
ever appears inside the arithmetic, never as a public key.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import MalformedInputError, PointNotOnCurveError
from .primitive import CURVE_ORDER, FIELD_MODULUS, decode_field, encode_word

CURVE_B = 3


@dataclass(frozen=True)
class CurvePoint:
    """Affine point on BN254 G1. Construction validates the curve equation."""
    x: int
    y: int

    def __post_init__(self):
        if not (0 <= self.x < FIELD_MODULUS and 0 <= self.y < FIELD_MODULUS):
            raise PointNotOnCurveError("coordinates are outside the base field")
        if not is_on_curve(self.x, self.y):
            raise PointNotOnCurveError(f"({hex(self.x)}, {hex(self.y)}) is not on the curve")

    def to_bytes(self) -> bytes:
        """x || y, each a 32-byte big-endian word."""
        return encode_word(self.x) + encode_word(self.y)

    def __repr__(self) -> str:
        return f"CurvePoint(x={hex(self.x)}, y={hex(self.y)})"


def is_on_curve(x: int, y: int) -> bool:
    p = FIELD_MODULUS
    return (y * y - (pow(x, 3, p) + CURVE_B)) % p == 0


def make_point(x_bytes: bytes, y_bytes: bytes) -> CurvePoint:
    """
    Decode two big-endian coordinates and validate them.

    This is the only gate for externally supplied public keys. Coordinates
    are reduced mod p before the check, same as the scalar codec.
    """
    return CurvePoint(decode_field(x_bytes), decode_field(y_bytes))


G = CurvePoint(1, 2)


def point_neg(P: Optional[CurvePoint]) -> Optional[CurvePoint]:
    if P is None:
        return None
    return CurvePoint(P.x, (-P.y) % FIELD_MODULUS)


def point_double(P: Optional[CurvePoint]) -> Optional[CurvePoint]:
    if P is None or P.y == 0:
        return None
    p = FIELD_MODULUS
    # a = 0, so the tangent slope is 3x^2 / 2y
    lam = (3 * P.x * P.x * pow(2 * P.y, -1, p)) % p
    x3 = (lam * lam - 2 * P.x) % p
    y3 = (lam * (P.x - x3) - P.y) % p
    return CurvePoint(x3, y3)


def point_add(P: Optional[CurvePoint], Q: Optional[CurvePoint]) -> Optional[CurvePoint]:
    if P is None:
        return Q
    if Q is None:
        return P
    p = FIELD_MODULUS
    if P.x == Q.x:
        if (P.y + Q.y) % p == 0:
            return None
        return point_double(P)
    lam = ((Q.y - P.y) * pow(Q.x - P.x, -1, p)) % p
    x3 = (lam * lam - P.x - Q.x) % p
    y3 = (lam * (P.x - x3) - P.y) % p
    return CurvePoint(x3, y3)


def scalar_mult(k: int, P: Optional[CurvePoint]) -> Optional[CurvePoint]:
    """k * P by left-to-right double-and-add; k is reduced mod r first."""
    k %= CURVE_ORDER
    result = None
    for bit in bin(k)[2:]:
        result = point_double(result)
        if bit == "1":
            result = point_add(result, P)
    return result


def multiply(k: int, P: CurvePoint) -> CurvePoint:
    """k * P for a scalar that must not vanish mod r."""
    R = scalar_mult(k, P)
    if R is None:
        raise MalformedInputError("scalar reduces to zero modulo the group order")
    return R
