#!/usr/bin/env python
#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# To use this, install with:
#
#   pip install --editable '.[cli]'
#
# That will create the command "metaplexor" in your path.
#
#
import click, sys, os, json

from metaplexor.constants import *
from metaplexor.exceptions import (ValidationError, EncodingError, SigningError,
                                    RequestError, MalformedResponseError)
from metaplexor.utils import gateway_url, ipfs_uri, key_did
from metaplexor.metadata import ensure_valid_metadata
from metaplexor.links import replace_file_refs_with_ipfs_links
from metaplexor.auth import make_auth_context, build_auth_request, get_upload_token
from metaplexor.signers import KeypairSigner
from metaplexor import __version__

# Cleanup display (supress traceback) for user-feedback exceptions
_sys_excepthook = sys.excepthook
def my_hook(ty, val, tb):
    if ty in { ValidationError, EncodingError, SigningError, RequestError,
                MalformedResponseError, RuntimeError }:
        print("FATAL: %s" % val, file=sys.stderr)
    else:
        return _sys_excepthook(ty, val, tb)
sys.excepthook=my_hook

# where solana-keygen puts it
DEFAULT_KEYPAIR = os.path.expanduser('~/.config/solana/id.json')

def fail(msg):
    # show message and stop
    click.echo(f"FAILURE: {msg}", err=True)
    sys.exit(1)

def get_signer(keypair):
    # load keypair file, or stop
    try:
        return KeypairSigner.from_keypair_file(keypair)
    except FileNotFoundError:
        fail(f"Keypair file not found: {keypair}")
    except ValueError as exc:
        fail(str(exc))

# Accept any prefix of a command name.
#
# from <https://click.palletsprojects.com/en/8.0.x/advanced/?#command-aliases>
class AliasedGroup(click.Group):
    def get_command(self, ctx, cmd_name):
        rv = click.Group.get_command(self, ctx, cmd_name)
        if rv is not None:
            return rv
        matches = [x for x in self.list_commands(ctx)
                   if x.startswith(cmd_name)]
        if not matches:
            return None
        elif len(matches) == 1:
            return click.Group.get_command(self, ctx, matches[0])
        ctx.fail(f"Abiguous command. Pick one of: {' | '.join(sorted(matches))}")

    def resolve_command(self, ctx, args):
        # always return the full command name
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name, cmd, args

# options shared by commands that sign
keypair_option = click.option('--keypair', '-k', default=DEFAULT_KEYPAIR,
                    type=click.Path(dir_okay=False), show_default=True,
                    help="Solana keypair file (JSON, 64 numbers)")
cluster_option = click.option('--cluster', '-c', default='devnet', show_default=True,
                    type=click.Choice(SOLANA_CLUSTERS), help="Solana cluster for tags")

#
# Options we want for all commands
#
@click.group(cls=AliasedGroup)
@click.option('--verbose', '-v', is_flag=True,
                    help="Show traffic with auth server.")
@click.option('--pdb', is_flag=True,
                    help="Prepare patient for surgery to remove bugs.")
@click.version_option(version=__version__)
def main(**kws):
    '''
    Prepare Metaplex NFT metadata for IPFS, and get upload tokens for CARs.

    You can use "tok", or "t" for "token": any distinct prefix for all commands.
    '''
    # implement PDB option here
    if kws.pop('pdb', False):
        import pdb, sys
        def doit(ex_cls, ex, tb):
            pdb.pm()
        sys.excepthook = doit

    if kws.get('verbose'):
        import metaplexor.transport as tt
        tt.VERBOSE = True

@main.command('did')
@keypair_option
def show_did(keypair):
    "Show the did:key value for a keypair's public key"
    signer = get_signer(keypair)
    click.echo(key_did(signer.pubkey))

@main.command('url')
@click.argument('cid', type=str)
@click.argument('path', type=str, default=METADATA_FILENAME)
def show_urls(cid, path):
    "Show gateway URL and ipfs:// URI for a file inside a CAR"
    click.echo(gateway_url(cid, path))
    click.echo(ipfs_uri(cid, path))

@main.command('links')
@click.argument('metadata', type=click.File('rt'))
@click.argument('asset_cid', type=str)
@click.option('--image', '-i', default=DEFAULT_IMAGE_FILENAME, show_default=True,
                    help="Filename of the image, as encoded into asset CAR")
@click.option('--extra', '-x', multiple=True, metavar="FILENAME",
                    help="Other filenames in asset CAR, in order (repeat as needed)")
@click.option('--outfile', '-o', type=click.File('wt'), default='-',
                    help="Where to write updated metadata")
def rewrite_links(metadata, asset_cid, image, extra, outfile):
    "Rewrite file refs in metadata JSON into links to an asset CAR"
    try:
        md = json.load(metadata)
    except ValueError as exc:
        fail(f"Bad JSON in {metadata.name}: {exc}")

    try:
        md = ensure_valid_metadata(md)
    except ValidationError as exc:
        fail(str(exc))

    rv = replace_file_refs_with_ipfs_links(md, image, extra, asset_cid)

    print(json.dumps(rv, indent=2, ensure_ascii=False), file=outfile)

@main.command('auth-request')
@click.argument('root_cid', type=str)
@keypair_option
@cluster_option
def show_auth_request(root_cid, keypair, cluster):
    "Sign, and show the request that would be sent (sends nothing)"
    signer = get_signer(keypair)
    auth = make_auth_context(signer, solana_cluster=cluster)

    headers, body = build_auth_request(auth, root_cid)

    for k, v in headers.items():
        click.echo(f'{k}: {v}')
    click.echo('')
    click.echo(body.decode('utf-8'))

@main.command('token')
@click.argument('root_cid', type=str)
@keypair_option
@cluster_option
@click.option('--endpoint', '-e', default=None, metavar="URL",
                    help=f"Auth service (default: ${AUTH_ENDPOINT_ENV} or built-in)")
def fetch_token(root_cid, keypair, cluster, endpoint):
    "Get an upload token for a CAR, given its root CID"
    signer = get_signer(keypair)
    auth = make_auth_context(signer, solana_cluster=cluster)

    token = get_upload_token(auth, root_cid, endpoint=endpoint)

    click.echo(token)

if __name__ == '__main__':
    main()

# EOF
