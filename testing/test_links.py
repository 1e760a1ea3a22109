#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Rewriting file references in metadata
#
import pytest
from copy import deepcopy

from metaplexor.links import replace_file_refs_with_ipfs_links

CID = 'bafyASSETS'
GW = 'https://dweb.link/ipfs/bafyASSETS/'
IPFS = 'ipfs://bafyASSETS/'

def test_rewrite(metadata):
    orig = deepcopy(metadata)
    rv = replace_file_refs_with_ipfs_links(metadata, 'cat.png', ['cat.mp4'], CID)

    # input not touched
    assert metadata == orig

    assert rv['image'] == GW + 'cat.png'
    assert rv['animation_url'] == GW + 'cat.mp4'
    assert rv['properties']['files'] == [
        { 'uri': GW + 'cat.png', 'type': 'image/png', 'cdn': True },
        { 'uri': IPFS + 'cat.png', 'type': 'image/png', 'cdn': False },
        { 'uri': 'https://example.com/cat-large.png', 'type': 'image/png', 'cdn': True },
        { 'uri': GW + 'cat.mp4', 'type': 'video/mp4', 'cdn': True },
        { 'uri': IPFS + 'cat.mp4', 'type': 'video/mp4', 'cdn': False },
    ]

    # everything else passes through
    for k in ('name', 'symbol', 'description', 'seller_fee_basis_points', 'attributes'):
        assert rv[k] == orig[k]
    assert rv['properties']['creators'] == orig['properties']['creators']
    assert rv['properties']['category'] == 'video'

def test_no_matches(metadata):
    # only 'image' changes when nothing else names a packaged file
    orig = deepcopy(metadata)
    rv = replace_file_refs_with_ipfs_links(metadata, 'dog.png', ['dog.mp4'], CID)

    assert rv['image'] == GW + 'dog.png'
    assert rv['animation_url'] == orig['animation_url']
    assert rv['properties']['files'] == orig['properties']['files']

    rv.pop('image')
    orig.pop('image')
    assert rv == orig

def test_extra_fields_copied(metadata):
    metadata['properties']['files'] = [
        { 'uri': 'cat.png', 'type': 'image/png', 'cdn': False, 'width': 800, 'tags': ['a'] },
    ]
    rv = replace_file_refs_with_ipfs_links(metadata, 'cat.png', [], CID)

    gw, ipfs = rv['properties']['files']
    assert gw == dict(uri=GW+'cat.png', type='image/png', cdn=True, width=800, tags=['a'])
    assert ipfs == dict(uri=IPFS+'cat.png', type='image/png', cdn=False, width=800, tags=['a'])

    # copies, not shared
    gw['tags'].append('b')
    assert ipfs['tags'] == ['a']
    assert metadata['properties']['files'][0]['tags'] == ['a']

def test_animation_url(metadata):
    # only additional files count, not the image
    metadata['animation_url'] = 'cat.png'
    rv = replace_file_refs_with_ipfs_links(metadata, 'cat.png', ['cat.mp4'], CID)
    assert rv['animation_url'] == 'cat.png'

    # unknown value: kept verbatim, not cleared
    metadata['animation_url'] = 'https://example.com/movie.mp4'
    rv = replace_file_refs_with_ipfs_links(metadata, 'cat.png', ['cat.mp4'], CID)
    assert rv['animation_url'] == 'https://example.com/movie.mp4'

    # absent stays absent
    del metadata['animation_url']
    rv = replace_file_refs_with_ipfs_links(metadata, 'cat.png', ['cat.mp4'], CID)
    assert 'animation_url' not in rv

def test_default_image_name(metadata):
    rv = replace_file_refs_with_ipfs_links(metadata, '', [], CID)
    assert rv['image'] == GW + 'image.png'

    rv = replace_file_refs_with_ipfs_links(metadata, None, [], CID)
    assert rv['image'] == GW + 'image.png'

def test_image_name_collision(metadata):
    # image filename also listed in additional files: each entry still
    # expands to exactly one gateway/ipfs pair
    metadata['properties']['files'] = [ { 'uri': 'cat.png', 'type': 'image/png' } ]
    rv = replace_file_refs_with_ipfs_links(metadata, 'cat.png', ['cat.png', 'cat.mp4'], CID)

    files = rv['properties']['files']
    assert [f['cdn'] for f in files] == [True, False]
    assert files[0]['uri'] == GW + 'cat.png'
    assert files[1]['uri'] == IPFS + 'cat.png'

def test_order_kept():
    md = dict(name='x', image='a', properties=dict(files=[
        dict(uri='one'), dict(uri='a'), dict(uri='two'), dict(uri='b'), dict(uri='three'),
    ]))
    rv = replace_file_refs_with_ipfs_links(md, 'a', ['b'], CID)

    assert [f['uri'] for f in rv['properties']['files']] == [
        'one', GW+'a', IPFS+'a', 'two', GW+'b', IPFS+'b', 'three' ]

    # untouched entries are exactly as before (no cdn added)
    assert rv['properties']['files'][0] == dict(uri='one')

def test_filenames_need_exact_match(metadata):
    metadata['properties']['files'] = [ { 'uri': 'CAT.png' }, { 'uri': './cat.png' } ]
    rv = replace_file_refs_with_ipfs_links(metadata, 'cat.png', [], CID)
    assert rv['properties']['files'] == metadata['properties']['files']

# EOF
