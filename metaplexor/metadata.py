#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Shape of Metaplex NFT metadata (JSON), as much as we care about.
#
# Only the fields we rewrite are strict; everything else is free-form
# and passes through untouched. See:
#   <https://docs.metaplex.com/token-metadata/specification>
#
import jsonschema
from jsonschema.exceptions import best_match
from .exceptions import ValidationError

FILE_DESCRIPTION_SCHEMA = {
    'type': 'object',
    'properties': {
        'uri': { 'type': 'string' },
        'type': { 'type': 'string' },
        'cdn': { 'type': 'boolean' },
    },
    'required': [ 'uri' ],
}

CREATOR_SCHEMA = {
    'type': 'object',
    'properties': {
        'address': { 'type': 'string' },
        'share': { 'type': 'integer', 'minimum': 0, 'maximum': 100 },
    },
    'required': [ 'address', 'share' ],
}

METADATA_SCHEMA = {
    '$schema': 'http://json-schema.org/draft-07/schema#',
    'type': 'object',
    'properties': {
        'name': { 'type': 'string' },
        'symbol': { 'type': 'string' },
        'description': { 'type': 'string' },
        'seller_fee_basis_points': { 'type': 'integer', 'minimum': 0, 'maximum': 10000 },
        'image': { 'type': 'string' },
        'animation_url': { 'type': 'string' },
        'external_url': { 'type': 'string' },
        'attributes': {
            'type': 'array',
            'items': {
                'type': 'object',
                'properties': { 'trait_type': { 'type': 'string' } },
                'required': [ 'value' ],
            },
        },
        'collection': {
            'type': 'object',
            'properties': {
                'name': { 'type': 'string' },
                'family': { 'type': 'string' },
            },
        },
        'properties': {
            'type': 'object',
            'properties': {
                'files': { 'type': 'array', 'items': FILE_DESCRIPTION_SCHEMA },
                'category': { 'type': 'string' },
                'creators': { 'type': 'array', 'items': CREATOR_SCHEMA },
            },
            'required': [ 'files' ],
        },
    },
    'required': [ 'name', 'image', 'properties' ],
}

_validator = jsonschema.Draft7Validator(METADATA_SCHEMA)

def ensure_valid_metadata(metadata):
    # Returns the metadata if it has the right shape, else raises ValidationError
    # - reports the "best" error only; jsonschema picks it
    err = best_match(_validator.iter_errors(metadata))
    if err is not None:
        where = '.'.join(str(p) for p in err.absolute_path) or '(top)'
        raise ValidationError(f'Invalid metadata at {where}: {err.message}', err.absolute_path)

    return metadata

# EOF
