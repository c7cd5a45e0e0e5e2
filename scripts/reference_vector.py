#!/usr/bin/env python3
"""
Print the reference sealed-bid vector

Inputs are fixed: auction private key 7, ephemeral scalar 3, bid 0x2A,
salt 0x00..01. Run this to record the vector that other implementations of
the contract-side decoder are checked against.
"""

import sys
from pathlib import Path

# Add parent directory to path to import sealedbid
sys.path.insert(0, str(Path(__file__).parent.parent))

from sealedbid import FixedRandomness, Variant, encrypt, encode_word, hex_encode
from sealedbid.keys import point_to_hex, public_key_from_private

AUCTION_PRIVATE_KEY = 7
EPHEMERAL_KEY = "0x03"
MESSAGE = "0x2a"
SALT = hex_encode(encode_word(1))


def main():
    pub_x, pub_y = point_to_hex(public_key_from_private(AUCTION_PRIVATE_KEY))
    print("=" * 70)
    print("REFERENCE VECTOR")
    print("=" * 70)
    print(f"auction public key x: {pub_x}")
    print(f"auction public key y: {pub_y}")
    print(f"ephemeral key:        {EPHEMERAL_KEY}")
    print(f"message:              {MESSAGE}")
    print(f"salt:                 {SALT}")
    print()
    direct = encrypt(MESSAGE, pub_x, pub_y, SALT, variant=Variant.DIRECT, ephemeral_key=EPHEMERAL_KEY)
    # mask fixed at 0 so the masked layout is reproducible too
    masked = encrypt(
        MESSAGE, pub_x, pub_y, SALT,
        variant=Variant.MASKED, ephemeral_key=EPHEMERAL_KEY, rng=FixedRandomness([0]),
    )
    print(f"direct: {direct}")
    print(f"masked: {masked}")


if __name__ == "__main__":
    main()
