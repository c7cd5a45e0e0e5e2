import binascii
import os
from typing import Iterable, List, Protocol, Union

from Crypto.Hash import keccak

from .errors import MalformedInputError

# alt_bn128 base field prime and group order (EIP-196)
FIELD_MODULUS = 21888242871839275222246405745257275088696311157297823662689037894645226208583
CURVE_ORDER = 21888242871839275222246405745257275088548364400416034343698204186575808495617

WORD_SIZE = 32


def hex_encode(b: bytes) -> str:
    return "0x" + binascii.hexlify(b).decode("ascii")

def hex_decode(s: str) -> bytes:
    raw = s[2:] if s[:2] in ("0x", "0X") else s
    if len(raw) % 2:
        raise MalformedInputError(f"odd-length hex string: {s!r}")
    try:
        return binascii.unhexlify(raw)
    except (binascii.Error, ValueError):
        raise MalformedInputError(f"not a hex string: {s!r}")

def decode_field(b: bytes) -> int:
    """Big-endian bytes to a base-field element. Values >= p are reduced mod p, not rejected."""
    return int.from_bytes(b, "big") % FIELD_MODULUS

def decode_scalar(b: bytes) -> int:
    """Big-endian bytes to a scalar. Values >= r are reduced mod r, not rejected."""
    return int.from_bytes(b, "big") % CURVE_ORDER

def encode_word(value: int, size: int = WORD_SIZE) -> bytes:
    if value < 0:
        raise MalformedInputError("negative values have no word encoding")
    try:
        return value.to_bytes(size, "big")
    except OverflowError:
        raise MalformedInputError(f"value does not fit in {size} bytes")

def decode_uint(b: bytes, bits: int) -> int:
    value = int.from_bytes(b, "big")
    if value >> bits:
        raise MalformedInputError(f"value exceeds {bits} bits")
    return value

def keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


class RandomnessSource(Protocol):
    def random_bytes(self, n: int) -> bytes: ...


class SystemRandomness:
    """OS CSPRNG. Build one per request when embedded in a service."""

    def random_bytes(self, n: int) -> bytes:
        return os.urandom(n)


class FixedRandomness:
    """
    Replays queued values in order, for reproducible test vectors.

    Each queued item is either bytes (returned as-is, length must match the
    request) or an int (encoded big-endian to the requested length).
    """

    def __init__(self, values: Iterable[Union[bytes, int]]):
        self._queue: List[Union[bytes, int]] = list(values)

    def random_bytes(self, n: int) -> bytes:
        if not self._queue:
            raise MalformedInputError("fixed randomness exhausted")
        value = self._queue.pop(0)
        if isinstance(value, int):
            return encode_word(value, n)
        if len(value) != n:
            raise MalformedInputError(f"fixed randomness holds {len(value)} bytes, {n} requested")
        return value

    @property
    def remaining(self) -> int:
        return len(self._queue)


def random_uint(rng: RandomnessSource, bits: int) -> int:
    return int.from_bytes(rng.random_bytes(bits // 8), "big")

def random_scalar(rng: RandomnessSource) -> int:
    # rejection sampling on [1, r); r < 2^254 so the top two bits are dropped
    while True:
        candidate = int.from_bytes(rng.random_bytes(WORD_SIZE), "big") & ((1 << 254) - 1)
        if 0 < candidate < CURVE_ORDER:
            return candidate
