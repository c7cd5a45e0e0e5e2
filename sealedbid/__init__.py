"""ECIES over BN254 for sealing auction bids to an on-chain decoder."""

from .errors import (
    SealedBidError,
    PointNotOnCurveError,
    MalformedInputError,
    UnsupportedOperationError,
)

from .primitive import (
    FIELD_MODULUS,
    CURVE_ORDER,
    hex_encode,
    hex_decode,
    decode_field,
    decode_scalar,
    encode_word,
    keccak256,
    RandomnessSource,
    SystemRandomness,
    FixedRandomness,
)

from .curve import (
    CurvePoint,
    G,
    make_point,
)

from .keys import (
    AuctionKeyPair,
    generate_ephemeral_keypair,
    derive_shared_secret,
    public_key_from_private,
)

from .kdf import derive_symmetric_key

from .cipher import (
    Variant,
    Cipher,
    MaskedCipher,
    DirectCipher,
    get_cipher,
    xor_keystream,
)

from .bundle import (
    EncryptedBid,
    pack_masked,
    pack_direct,
    parse_bid,
    parse_bid_hex,
)

from .ecies import (
    encrypt_bid,
    decrypt_bid,
    encrypt,
    decrypt,
    Outcome,
    EncryptRequest,
    try_encrypt,
    try_decrypt,
    encrypt_many,
)

__all__ = [
    # Errors
    "SealedBidError",
    "PointNotOnCurveError",
    "MalformedInputError",
    "UnsupportedOperationError",
    # Field codec and randomness
    "FIELD_MODULUS",
    "CURVE_ORDER",
    "hex_encode",
    "hex_decode",
    "decode_field",
    "decode_scalar",
    "encode_word",
    "keccak256",
    "RandomnessSource",
    "SystemRandomness",
    "FixedRandomness",
    # Curve
    "CurvePoint",
    "G",
    "make_point",
    # Key agreement and derivation
    "AuctionKeyPair",
    "generate_ephemeral_keypair",
    "derive_shared_secret",
    "public_key_from_private",
    "derive_symmetric_key",
    # Cipher
    "Variant",
    "Cipher",
    "MaskedCipher",
    "DirectCipher",
    "get_cipher",
    "xor_keystream",
    # Wire layout
    "EncryptedBid",
    "pack_masked",
    "pack_direct",
    "parse_bid",
    "parse_bid_hex",
    # Pipeline
    "encrypt_bid",
    "decrypt_bid",
    "encrypt",
    "decrypt",
    "Outcome",
    "EncryptRequest",
    "try_encrypt",
    "try_decrypt",
    "encrypt_many",
]
