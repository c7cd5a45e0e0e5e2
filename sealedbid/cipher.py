"""
Keystream ciphers for sealed bids.

Both variants XOR a plaintext with the 32-byte symmetric key, cycling the key
when the plaintext is longer. They differ in how the bid is laid out:

- MASKED: 128-bit bid, plaintext = BE16(S) || BE16(S - M mod 2^128) for a
  random 128-bit mask S. Decryption is not defined.
- DIRECT: 256-bit bid, plaintext = BE32(M). Decryption XORs the key back out.
"""

from abc import ABC, abstractmethod
from enum import Enum
from itertools import cycle

from .errors import MalformedInputError, UnsupportedOperationError
from .primitive import RandomnessSource, encode_word, random_uint

MASK_BITS = 128
MASK_MODULUS = 1 << MASK_BITS


class Variant(str, Enum):
    MASKED = "masked"
    DIRECT = "direct"

    @classmethod
    def parse(cls, name: str) -> "Variant":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise MalformedInputError(f"unknown cipher variant: {name!r}")


def xor_keystream(data: bytes, key: bytes) -> bytes:
    if not key:
        raise MalformedInputError("empty keystream key")
    return bytes(a ^ b for a, b in zip(data, cycle(key)))


def mask_message(seed: int, message: int) -> int:
    # unsigned wraparound when message > seed
    return (seed - message) % MASK_MODULUS


def unmask_message(seed: int, masked: int) -> int:
    """Inverse of mask_message. Not wired into decryption; see MaskedCipher.decrypt."""
    return (seed - masked) % MASK_MODULUS


class Cipher(ABC):
    variant: Variant
    message_bits: int

    def check_message(self, message: int) -> None:
        if message < 0 or message >> self.message_bits:
            raise MalformedInputError(
                f"{self.variant.value} bids must fit in {self.message_bits} bits"
            )

    @abstractmethod
    def plaintext(self, message: int, rng: RandomnessSource) -> bytes:
        ...

    def prepare(self, message: int, rng: RandomnessSource) -> bytes:
        """Validate the bid and lay it out; draws the mask, if the layout has one."""
        self.check_message(message)
        return self.plaintext(message, rng)

    def seal(self, plaintext: bytes, key: bytes) -> bytes:
        return xor_keystream(plaintext, key)

    @abstractmethod
    def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
        ...


class MaskedCipher(Cipher):
    variant = Variant.MASKED
    message_bits = 128

    def plaintext(self, message: int, rng: RandomnessSource) -> bytes:
        seed = random_uint(rng, MASK_BITS)
        masked = mask_message(seed, message)
        return seed.to_bytes(16, "big") + masked.to_bytes(16, "big")

    def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
        # the contract-side decoder for this layout is not pinned down
        raise UnsupportedOperationError("decryption of masked bids is not supported")


class DirectCipher(Cipher):
    variant = Variant.DIRECT
    message_bits = 256

    def plaintext(self, message: int, rng: RandomnessSource) -> bytes:
        return encode_word(message)

    def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
        if len(ciphertext) != 32:
            raise MalformedInputError(f"direct ciphertext must be 32 bytes, got {len(ciphertext)}")
        return xor_keystream(ciphertext, key)


_CIPHERS = {
    Variant.MASKED: MaskedCipher(),
    Variant.DIRECT: DirectCipher(),
}


def get_cipher(variant: Variant) -> Cipher:
    return _CIPHERS[Variant.parse(variant)]
