#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Package NFT asset files and metadata into two CARs, ready for upload.
#
# - first CAR: the image + any additional asset files
# - second CAR: just "metadata.json", with file refs rewritten to point into the first
#
# Nothing is uploaded here. Links in the result will not resolve until both
# CARs are stored somewhere (NFT.Storage, etc).
#
# The CAR encoder is provided by caller: any callable taking a list of File
# and returning an EncodedCar. Its root CID must be deterministic for the
# same file names + contents.
#
from collections import namedtuple
from .constants import DEFAULT_IMAGE_FILENAME, METADATA_FILENAME
from .exceptions import EncodingError
from .links import replace_file_refs_with_ipfs_links
from .metadata import ensure_valid_metadata
from .utils import canonical_json, gateway_url, ipfs_uri

File = namedtuple('File', 'name data')

EncodedCar = namedtuple('EncodedCar', 'car cid')

PackagedNFT = namedtuple('PackagedNFT',
                'metadata encoded_metadata encoded_assets metadata_gateway_url metadata_uri')

def encode_files(encoder, files):
    # run the encoder, report any failure as EncodingError
    try:
        rv = encoder(files)
    except EncodingError:
        raise
    except Exception as exc:
        names = ', '.join(f.name for f in files)
        raise EncodingError(f"CAR encoding failed for [{names}]: {exc}") from exc

    return EncodedCar(*rv)

def prepare_metaplex_nft(metadata, image_file, *additional_files, encoder):
    '''
    Encode NFT metadata and asset files into CARs. Returns PackagedNFT.

    - 'image' in metadata becomes a gateway URL for image_file
    - 'animation_url' becomes a gateway URL if it is the name of an additional file
    - each 'properties.files' entry that names a packaged file becomes two entries,
      a gateway URL (cdn=True) and an ipfs:// uri (cdn=False)

    Raises ValidationError before any encoding if metadata is not acceptable.
    '''
    validated = ensure_valid_metadata(metadata)

    asset_files = [image_file] + list(additional_files)
    encoded_assets = encode_files(encoder, asset_files)

    image_filename = image_file.name or DEFAULT_IMAGE_FILENAME
    additional_filenames = [f.name for f in additional_files]

    linked = replace_file_refs_with_ipfs_links(validated, image_filename,
                                    additional_filenames, str(encoded_assets.cid))

    metadata_file = File(METADATA_FILENAME, canonical_json(linked))
    encoded_metadata = encode_files(encoder, [metadata_file])

    metadata_cid = str(encoded_metadata.cid)

    return PackagedNFT(metadata=linked,
                        encoded_metadata=encoded_metadata,
                        encoded_assets=encoded_assets,
                        metadata_gateway_url=gateway_url(metadata_cid, METADATA_FILENAME),
                        metadata_uri=ipfs_uri(metadata_cid, METADATA_FILENAME))

# EOF
