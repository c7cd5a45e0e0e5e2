import logging
import sys

from . import ecies, rsa_oaep
from .cipher import Variant
from .config import get_settings
from .errors import SealedBidError
from .keys import AuctionKeyPair
from .primitive import SystemRandomness


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="sealedbid",
        description="Seal and open auction bids (ECIES over BN254, RSA-OAEP)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    enc = subparsers.add_parser("encrypt", help="Seal a bid to an auction public key")
    enc.add_argument("message", help="Bid value, hex")
    enc.add_argument("public_key_x", help="Auction public key x, hex")
    enc.add_argument("public_key_y", help="Auction public key y, hex")
    enc.add_argument("salt", help="256-bit salt, hex")
    enc.add_argument(
        "--ephemeral-key",
        default=None,
        help="Fixed ephemeral scalar, hex (reproducible output, testing only)"
    )
    enc.add_argument(
        "--variant",
        choices=[v.value for v in Variant],
        default=None,
        help="Wire layout (default: SEALEDBID_VARIANT or masked)"
    )

    dec = subparsers.add_parser("decrypt", help="Open a direct-layout bid with the auction private key")
    dec.add_argument("ciphertext", help="32-byte ciphertext, hex")
    dec.add_argument("bid_public_key_x", help="Bid public key x, hex")
    dec.add_argument("bid_public_key_y", help="Bid public key y, hex")
    dec.add_argument("private_key", help="Auction private scalar, hex")
    dec.add_argument("salt", help="256-bit salt, hex")
    dec.add_argument(
        "--variant",
        choices=[v.value for v in Variant],
        default=Variant.DIRECT.value,
    )

    subparsers.add_parser("keygen", help="Generate an auction key pair")

    rsa_enc = subparsers.add_parser("rsa-encrypt", help="RSA-OAEP encrypt with raw key components")
    rsa_enc.add_argument("message")
    rsa_enc.add_argument("label")
    rsa_enc.add_argument("public_exponent")
    rsa_enc.add_argument("modulus")
    rsa_enc.add_argument("seed", help="32-byte OAEP seed, hex")

    rsa_dec = subparsers.add_parser("rsa-decrypt", help="RSA-OAEP decrypt with raw key components")
    rsa_dec.add_argument("ciphertext")
    rsa_dec.add_argument("label")
    rsa_dec.add_argument("public_exponent")
    rsa_dec.add_argument("private_exponent")
    rsa_dec.add_argument("modulus")

    return parser


def run(args) -> str:
    if args.command == "encrypt":
        return ecies.encrypt(
            args.message,
            args.public_key_x,
            args.public_key_y,
            args.salt,
            variant=args.variant,
            ephemeral_key=args.ephemeral_key,
        )
    if args.command == "decrypt":
        return ecies.decrypt(
            args.ciphertext,
            args.bid_public_key_x,
            args.bid_public_key_y,
            args.private_key,
            args.salt,
            variant=args.variant,
        )
    if args.command == "keygen":
        keypair = AuctionKeyPair.generate(SystemRandomness()).to_dict()
        return " ".join([keypair["private_key"], keypair["public_key_x"], keypair["public_key_y"]])
    if args.command == "rsa-encrypt":
        return rsa_oaep.encrypt_hex(
            args.message, args.label, args.public_exponent, args.modulus, seed=args.seed
        )
    return rsa_oaep.decrypt_hex(
        args.ciphertext, args.label, args.public_exponent, args.private_exponent, args.modulus
    )


def cli(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except SealedBidError as exc:
        print(exc.describe(), file=sys.stderr)
        return 1
    logging.basicConfig(level=settings.log_level, stream=sys.stderr)

    try:
        output = run(args)
    except SealedBidError as exc:
        # nothing goes to stdout on failure
        print(exc.describe(), file=sys.stderr)
        return 1

    print(output)
    return 0


def main(argv=None) -> int:
    return cli(argv)
