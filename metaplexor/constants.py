#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Protocol constants.
#

# HTTP gateway used for links inside the metadata
GATEWAY_HOST = 'https://dweb.link'

# when the image file has no name, this is what the asset CAR calls it
DEFAULT_IMAGE_FILENAME = 'image.png'

# the metadata CAR holds exactly one file, with this name
METADATA_FILENAME = 'metadata.json'

# token issuer; override with METAPLEX_AUTH_ENDPOINT in environment
DEFAULT_AUTH_ENDPOINT = 'https://us-central1-metaplex-web3storage-dev.cloudfunctions.net/metaplex-auth-dev'
AUTH_ENDPOINT_ENV = 'METAPLEX_AUTH_ENDPOINT'

# request headers understood by the token issuer
HEADER_MINT_KEY = 'X-Metaplex-Mint-PubKey'
HEADER_SIGNATURE = 'X-Metaplex-Mint-Signature'

# tag names inside the signed "put" request
TAG_CHAIN = 'chain'
TAG_SOLANA_CLUSTER = 'solana-cluster'

CHAIN_SOLANA = 'solana'
SOLANA_CLUSTERS = ( 'mainnet-beta', 'devnet' )

# prepended to the message before signing, but never sent
# - the verifier must add exactly these bytes back
SIGNING_DOMAIN_PREFIX = b'metaplex-pl-dotstorage-auth:'

# multicodec code for "ed25519-pub", varint encoded before the key in did:key
MULTICODEC_ED25519_PUB = 0xed

# multibase prefix character for base58btc
MULTIBASE_BASE58BTC = 'z'

DID_KEY_PREFIX = 'did:key:'

# sizes (bytes)
ED25519_PUBKEY_SIZE = 32
ED25519_SIG_SIZE = 64

# EOF
