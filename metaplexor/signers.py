#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Ed25519 signing with a Solana keypair, using PyNaCl.
#
# My standards:
# - pubkeys: 32 bytes
# - private key: 32 byte seed, (Solana stores seed + pubkey, 64 bytes)
# - signature: 64 bytes, detached
# - verify returns bool, doesn't raise exception
#
import os, json
from nacl.signing import SigningKey, VerifyKey
from nacl.exceptions import BadSignatureError
from .constants import ED25519_PUBKEY_SIZE, ED25519_SIG_SIZE

class KeypairSigner:
    #
    # Signer for a local keypair. Wallets and hardware can do the same
    # with their own class: only sign_message() is needed.
    #
    def __init__(self, seed):
        assert len(seed) == 32, 'expecting 32-byte seed'
        self._sk = SigningKey(bytes(seed))
        self.pubkey = bytes(self._sk.verify_key)

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.pubkey.hex()[0:16])

    @classmethod
    def from_keypair_bytes(cls, raw):
        # 64 bytes: seed then pubkey, like solana-keygen writes
        if len(raw) != 64:
            raise ValueError("Keypair must be 64 bytes")

        rv = cls(raw[0:32])
        if rv.pubkey != bytes(raw[32:]):
            raise ValueError("Keypair pubkey does not match private key")

        return rv

    @classmethod
    def from_keypair_file(cls, fname):
        # JSON file: list of 64 numbers
        with open(os.path.expanduser(fname), 'rt') as fp:
            try:
                nums = json.load(fp)
                raw = bytes(nums)
            except (ValueError, TypeError):
                raise ValueError(f"Not a Solana keypair file: {fname}")

        return cls.from_keypair_bytes(raw)

    def sign_message(self, message):
        # returns 64-byte detached signature over message (not a digest)
        return self._sk.sign(bytes(message)).signature

def verify_signature(pubkey, message, sig):
    # returns True or False
    if len(pubkey) != ED25519_PUBKEY_SIZE or len(sig) != ED25519_SIG_SIZE:
        return False

    try:
        VerifyKey(bytes(pubkey)).verify(bytes(message), bytes(sig))
    except BadSignatureError:
        return False

    return True

# EOF
