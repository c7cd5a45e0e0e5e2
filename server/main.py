import logging
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from sealedbid import ecies
from sealedbid.bundle import parse_bid_hex
from sealedbid.config import get_settings
from sealedbid.errors import SealedBidError, UnsupportedOperationError
from sealedbid.keys import AuctionKeyPair
from sealedbid.primitive import SystemRandomness

from .schemas import EncryptIn, EncryptOut, DecryptIn, DecryptOut, KeyPairOut

logger = logging.getLogger(__name__)
settings = get_settings()

app = FastAPI(title="Sealed Bid Encryption Service")

# ---- CORS ----
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _reject(exc: SealedBidError) -> HTTPException:
    logger.info("rejected request: %s", exc.describe())
    return HTTPException(422, {"kind": exc.kind, "message": exc.message})

# ---- HEALTH ----

@app.get("/health")
async def health():
    return {"status": "ok", "variant": get_settings().variant.value}

# ---- KEYS ----

@app.post("/keys", response_model=KeyPairOut)
def create_keypair():
    return KeyPairOut(**AuctionKeyPair.generate(SystemRandomness()).to_dict())

# ---- BIDS ----

@app.post("/encrypt", response_model=EncryptOut)
def encrypt_bid(data: EncryptIn):
    if data.ephemeral_key is not None and not get_settings().allow_fixed_ephemeral:
        raise _reject(UnsupportedOperationError("fixed ephemeral keys are disabled on this service"))

    # fresh entropy source per request, never shared across requests
    try:
        encoded = ecies.encrypt(
            data.message,
            data.public_key_x,
            data.public_key_y,
            data.salt,
            variant=data.variant,
            ephemeral_key=data.ephemeral_key,
            rng=SystemRandomness(),
        )
        bid = parse_bid_hex(encoded)
    except SealedBidError as exc:
        raise _reject(exc)

    return EncryptOut(encrypted_bid=encoded, **bid.to_dict())

@app.post("/decrypt", response_model=DecryptOut)
def decrypt_bid(data: DecryptIn):
    try:
        message = ecies.decrypt(
            data.ciphertext,
            data.bid_public_key_x,
            data.bid_public_key_y,
            data.private_key,
            data.salt,
        )
    except SealedBidError as exc:
        raise _reject(exc)
    return DecryptOut(message=message)
