#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#

__version__ = '0.2.0'

__all__ = [ 'auth', 'exceptions', 'transport', 'constants', 'utils',
            'links', 'metadata', 'prepare', 'signers' ]

# package NFT assets + metadata, ready for upload
from metaplexor.prepare import prepare_metaplex_nft, File, EncodedCar, PackagedNFT

# authorize an upload, using a Solana keypair
from metaplexor.auth import AuthContext, Signer, make_auth_context, get_upload_token
