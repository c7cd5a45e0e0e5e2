from pydantic import BaseModel
from typing import Optional

from sealedbid.cipher import Variant

# hex strings throughout, "0x" prefix optional on input

class EncryptIn(BaseModel):
    message: str
    public_key_x: str
    public_key_y: str
    salt: str
    variant: Optional[Variant] = None
    ephemeral_key: Optional[str] = None  # honoured only with SEALEDBID_ALLOW_FIXED_EPHEMERAL

class EncryptOut(BaseModel):
    encrypted_bid: str
    variant: Variant
    ciphertext: str
    bid_public_key_x: str
    bid_public_key_y: str

class DecryptIn(BaseModel):
    ciphertext: str
    bid_public_key_x: str
    bid_public_key_y: str
    private_key: str
    salt: str

class DecryptOut(BaseModel):
    message: str

# auction key pair, returned once to the auction holder
class KeyPairOut(BaseModel):
    private_key: str
    public_key_x: str
    public_key_y: str
