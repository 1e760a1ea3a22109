#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Rewrite file references in NFT metadata into IPFS links.
#
# Given the root CID of the asset CAR, every mention of a packaged file
# by its bare filename becomes a link into that CAR:
#
# - 'image' is always the gateway URL of the image file
# - 'animation_url' becomes a gateway URL, if it names one of the additional files
# - each 'properties.files' entry naming a packaged file becomes *two* entries:
#       1) gateway URL, with cdn=True
#       2) ipfs:// uri, with cdn=False
#   and other entries are kept, in order, untouched.
#
from copy import deepcopy
from .constants import DEFAULT_IMAGE_FILENAME
from .utils import gateway_url, ipfs_uri

def replace_file_refs_with_ipfs_links(metadata, image_filename, additional_filenames, asset_root_cid):
    # Returns updated copy of metadata; does not validate, does not modify original.
    image_filename = image_filename or DEFAULT_IMAGE_FILENAME
    additional_filenames = list(additional_filenames)
    packaged = [image_filename] + additional_filenames
    cid = str(asset_root_cid)

    files = []
    for f in metadata['properties']['files']:
        if f['uri'] not in packaged:
            files.append(deepcopy(f))
            continue

        # matched only once, even if image name repeats in additional files
        files.append(dict(deepcopy(f), uri=gateway_url(cid, f['uri']), cdn=True))
        files.append(dict(deepcopy(f), uri=ipfs_uri(cid, f['uri']), cdn=False))

    rv = deepcopy(metadata)
    rv['image'] = gateway_url(cid, image_filename)

    animation_url = metadata.get('animation_url', None)
    if animation_url and animation_url in additional_filenames:
        rv['animation_url'] = gateway_url(cid, animation_url)

    rv['properties']['files'] = files

    return rv

# EOF
