from .curve import CurvePoint
from .primitive import encode_word, keccak256


def derive_symmetric_key(shared_secret: CurvePoint, salt: int) -> bytes:
    """
    keccak256(BE32(shared.x) || BE32(salt)).

    Only the x coordinate of the shared point is hashed. The salt separates
    bids sealed to the same auction key; it is public.
    """
    return keccak256(encode_word(shared_secret.x) + encode_word(salt))
