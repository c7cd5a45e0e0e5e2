"""
Complete End-to-End Example: Sealed-Bid Auction

Demonstrates a full auction round:
1. Auction holder generates the auction key pair
2. Bidders seal bids to the auction public key (direct layout)
3. Auction holder opens every bid with the private key
4. Masked layout and batch encryption with a bad key in the batch
"""

from sealedbid import (
    AuctionKeyPair,
    SystemRandomness,
    Variant,
    EncryptRequest,
    encrypt,
    decrypt,
    encrypt_many,
    parse_bid_hex,
    hex_encode,
    encode_word,
)
from sealedbid.keys import point_to_hex


# ========================================
# SETUP PHASE: Auction Key
# ========================================

print("=" * 60)
print("SETUP: Auction Key Pair")
print("=" * 60)

auction = AuctionKeyPair.generate(SystemRandomness())
auction_keys = auction.to_dict()
pub_x, pub_y = auction_keys["public_key_x"], auction_keys["public_key_y"]

print(f"✓ Auction key pair generated")
print(f"  Public x: {pub_x[:20]}...")
print(f"  Public y: {pub_y[:20]}...")


# ========================================
# BIDDING PHASE: Sealing Bids
# ========================================

print("\n" + "=" * 60)
print("BIDDING: Bidders Seal Their Bids")
print("=" * 60)

bids = {
    "bidder-1": (0x2A, "0x" + "00" * 31 + "01"),
    "bidder-2": (1_000_000, "0x" + "00" * 31 + "02"),
    "bidder-3": (2**200, "0x" + "00" * 31 + "03"),
}
sealed = {}
for bidder, (amount, salt) in bids.items():
    encrypted = encrypt(hex_encode(encode_word(amount)), pub_x, pub_y, salt, variant=Variant.DIRECT)
    sealed[bidder] = (encrypted, salt)
    print(f"\n{bidder} seals {amount}")
    print(f"  Encrypted bid: {encrypted[:42]}...")


# ========================================
# SETTLEMENT PHASE: Opening Bids
# ========================================

print("\n" + "=" * 60)
print("SETTLEMENT: Auction Holder Opens Bids")
print("=" * 60)

for bidder, (encrypted, salt) in sealed.items():
    bid = parse_bid_hex(encrypted)
    bid_x, bid_y = point_to_hex(bid.bid_public_key)
    opened = decrypt("0x" + bid.ciphertext.hex(), bid_x, bid_y, auction_keys["private_key"], salt)
    amount = int(opened, 16)
    assert amount == bids[bidder][0]
    print(f"  {bidder}: {amount} ✓")


# ========================================
# MASKED LAYOUT + BATCH
# ========================================

print("\n" + "=" * 60)
print("BATCH: Masked Layout, One Bad Key")
print("=" * 60)

requests = [
    EncryptRequest("0x2a", pub_x, pub_y, "0x01"),
    EncryptRequest("0x2a", "0x01", "0x03", "0x01"),  # not on the curve
    EncryptRequest("0x64", pub_x, pub_y, "0x02"),
]
for i, outcome in enumerate(encrypt_many(requests, variant=Variant.MASKED)):
    if outcome.ok:
        print(f"  [{i}] {outcome.value[:42]}... ✓")
    else:
        print(f"  [{i}] {outcome.error.describe()}")

print("\n" + "=" * 60)
print("✓ COMPLETE END-TO-END EXAMPLE SUCCESSFUL")
print("=" * 60)
