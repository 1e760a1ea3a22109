# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
import json, base58
from urllib.parse import urljoin, urlsplit, urlunsplit, quote
from .constants import *

def canonical_json(obj):
    # compact JSON, UTF-8, keys in insertion order (not sorted!)
    # - same bytes as JSON.stringify() would make
    return json.dumps(obj, separators=(',', ':'), ensure_ascii=False).encode('utf-8')

# characters a WHATWG URL serializer leaves alone in a path (plus '%', so
# already-escaped values are kept as-is)
_PATH_SAFE = "/?#[]@!$&'()*+,;=:%~|^"

def _clean_path(path):
    return quote(path, safe=_PATH_SAFE)

def gateway_url(cid, path):
    # HTTP gateway link to a file inside a CAR
    # - trailing slash on base is critical, else the CID would be dropped
    base = urljoin(GATEWAY_HOST, f'/ipfs/{cid}/')
    return urljoin(base, _clean_path(path))

def ipfs_uri(cid, path):
    # ipfs:// link to a file inside a CAR
    # - urljoin won't resolve for unknown schemes, so resolve as http and swap back
    path = _clean_path(path)
    if urlsplit(path).scheme:
        # already absolute
        return path
    if path.startswith('//'):
        # network-path ref: keeps our scheme, replaces the CID
        return 'ipfs:' + path

    parts = urlsplit(urljoin(f'http://{cid}/', path))

    return urlunsplit(('ipfs',) + tuple(parts[1:]))

def ser_varint(n):
    # unsigned LEB128, as used by multicodec
    assert n >= 0
    rv = bytearray()
    while True:
        b = n & 0x7f
        n >>= 7
        if n:
            rv.append(b | 0x80)
        else:
            rv.append(b)
            return bytes(rv)

def deser_varint(raw):
    # returns (value, num bytes consumed)
    n = shift = 0
    for pos, b in enumerate(raw):
        n |= (b & 0x7f) << shift
        if not (b & 0x80):
            return n, pos+1
        shift += 7

    raise ValueError("Truncated varint")

def multibase_encode(raw):
    # base58btc multibase: 'z' + base58 (bitcoin alphabet)
    return MULTIBASE_BASE58BTC + base58.b58encode(raw).decode('ascii')

def multibase_decode(text):
    if not text or text[0] != MULTIBASE_BASE58BTC:
        raise ValueError("Only base58btc multibase supported")
    return base58.b58decode(text[1:])

def key_did(pubkey):
    # self-certifying identifier for an Ed25519 public key
    assert len(pubkey) == ED25519_PUBKEY_SIZE, 'expecting 32-byte ed25519 pubkey'

    with_codec = ser_varint(MULTICODEC_ED25519_PUB) + bytes(pubkey)

    return DID_KEY_PREFIX + multibase_encode(with_codec)

def did_key_to_pubkey(did):
    # reverse of key_did(), raises ValueError on anything else
    if not did.startswith(DID_KEY_PREFIX):
        raise ValueError("Not a did:key value")

    raw = multibase_decode(did[len(DID_KEY_PREFIX):])
    codec, used = deser_varint(raw)
    if codec != MULTICODEC_ED25519_PUB:
        raise ValueError("Not an ed25519 public key: codec 0x%x" % codec)

    pubkey = raw[used:]
    if len(pubkey) != ED25519_PUBKEY_SIZE:
        raise ValueError("Wrong pubkey length")

    return pubkey

# EOF
