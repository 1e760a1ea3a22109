#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# auth.py
#
# Get an upload token for a CAR from the Metaplex auth service.
#
# Request is a "put" message naming the root CID, signed by the minting key:
#
#   body = {"put":{"rootCID":"<cid>","tags":{"chain":"solana","solana-cluster":"<cluster>"}}}
#   signature = sign(b"metaplex-pl-dotstorage-auth:" + body)
#
# - key order in body matters; the server checks signature over exact bytes
# - prefix is never sent, server adds it back before verifying
# - pubkey goes in a header as did:key, signature as base58btc multibase
#
import os
from collections import namedtuple
from .constants import *
from .exceptions import SigningError, RequestError, MalformedResponseError
from .utils import canonical_json, key_did, multibase_encode, multibase_decode, did_key_to_pubkey

AuthContext = namedtuple('AuthContext', 'chain solana_cluster signer pubkey')

# one per request, never reused
RequestContext = namedtuple('RequestContext', 'message message_bytes mint_did signature')

class Signer:
    #
    # Interface for anything that can sign for the minting key. Wallets,
    # hardware, or a local keypair (see signers.KeypairSigner).
    #
    def sign_message(self, message):
        # take raw message bytes (not a digest), return 64-byte ed25519 signature
        raise NotImplementedError

def make_auth_context(signer, pubkey=None, solana_cluster='devnet'):
    # build and check an AuthContext
    # - pubkey can be omitted if signer knows it
    if pubkey is None:
        pubkey = getattr(signer, 'pubkey', None)
    if solana_cluster not in SOLANA_CLUSTERS:
        raise ValueError(f"Unknown Solana cluster: {solana_cluster}")
    if not pubkey or len(pubkey) != ED25519_PUBKEY_SIZE:
        raise ValueError("Need 32-byte ed25519 pubkey")

    return AuthContext(CHAIN_SOLANA, solana_cluster, signer, bytes(pubkey))

def auth_endpoint():
    # where the token issuer lives
    return os.environ.get(AUTH_ENDPOINT_ENV) or DEFAULT_AUTH_ENDPOINT

def put_car_message(auth, root_cid):
    tags = {
        TAG_CHAIN: auth.chain,
        TAG_SOLANA_CLUSTER: auth.solana_cluster,
    }
    return dict(put=dict(rootCID=str(root_cid), tags=tags))

def make_put_car_request_context(auth, root_cid):
    # build message, sign it
    message = put_car_message(auth, root_cid)
    message_bytes = canonical_json(message)

    mint_did = key_did(auth.pubkey)

    try:
        signature = auth.signer.sign_message(SIGNING_DOMAIN_PREFIX + message_bytes)
    except SigningError:
        raise
    except Exception as exc:
        # user said no, or wallet went away: report as-is, no retry
        raise SigningError(str(exc)) from exc

    return RequestContext(message, message_bytes, mint_did, bytes(signature))

def request_headers(context):
    return {
        'Content-Type': 'application/json',
        HEADER_MINT_KEY: context.mint_did,
        HEADER_SIGNATURE: multibase_encode(context.signature),
    }

def request_body(context):
    # exactly the bytes that were signed, minus the prefix
    return context.message_bytes

def build_auth_request(auth, root_cid):
    # returns (headers, body) for the token request
    context = make_put_car_request_context(auth, root_cid)

    return request_headers(context), request_body(context)

def get_upload_token(auth, root_cid, transport=None, endpoint=None):
    # Sign a "put" request for root_cid and trade it for an upload token (string)
    headers, body = build_auth_request(auth, root_cid)

    if transport is None:
        from .transport import HTTPTransport
        transport = my_transport = HTTPTransport()
    else:
        my_transport = None

    try:
        resp = transport.post(endpoint or auth_endpoint(), headers=headers, data=body)
    finally:
        if my_transport:
            my_transport.close()

    if not (200 <= resp.status_code < 300):
        # don't even look at body
        raise RequestError(resp.status_code, resp.reason)

    try:
        rv = resp.json()
    except ValueError:
        raise MalformedResponseError("Response body is not JSON")

    token = rv.get('token', None) if isinstance(rv, dict) else None
    if not isinstance(token, str):
        raise MalformedResponseError("No token in response body")

    return token

def check_auth_request(headers, body):
    # Server side: is this a valid signed request? Returns True or False.
    from .signers import verify_signature

    try:
        pubkey = did_key_to_pubkey(headers[HEADER_MINT_KEY])
        sig = multibase_decode(headers[HEADER_SIGNATURE])
    except (KeyError, ValueError):
        return False

    return verify_signature(pubkey, SIGNING_DOMAIN_PREFIX + bytes(body), sig)

# EOF
