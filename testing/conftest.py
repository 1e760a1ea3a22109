import pytest, json, hashlib
from copy import deepcopy

from metaplexor.prepare import EncodedCar

SAMPLE_METADATA = {
    'name': 'Cat #1',
    'symbol': 'CAT',
    'description': 'A cat',
    'seller_fee_basis_points': 500,
    'image': 'cat.png',
    'animation_url': 'cat.mp4',
    'attributes': [ { 'trait_type': 'whiskers', 'value': 'long' } ],
    'properties': {
        'category': 'video',
        'files': [
            { 'uri': 'cat.png', 'type': 'image/png' },
            { 'uri': 'https://example.com/cat-large.png', 'type': 'image/png', 'cdn': True },
            { 'uri': 'cat.mp4', 'type': 'video/mp4' },
        ],
        'creators': [ { 'address': 'B1af...', 'share': 100 } ],
    },
}

@pytest.fixture
def metadata():
    # fresh copy each time, tests may poke at it
    return deepcopy(SAMPLE_METADATA)

@pytest.fixture
def keypair_seed():
    return bytes(range(32))

@pytest.fixture
def signer(keypair_seed):
    from metaplexor.signers import KeypairSigner
    return KeypairSigner(keypair_seed)

@pytest.fixture
def auth(signer):
    from metaplexor.auth import make_auth_context
    return make_auth_context(signer, solana_cluster='devnet')

@pytest.fixture
def keypair_file(tmp_path, signer, keypair_seed):
    # as written by solana-keygen
    fn = tmp_path / 'id.json'
    fn.write_text(json.dumps(list(keypair_seed + signer.pubkey)))
    return str(fn)

class FakeEncoder:
    # stands in for a real CAR encoder: deterministic cid from names + contents
    def __init__(self):
        self.calls = []

    def __call__(self, files):
        self.calls.append([f.name for f in files])
        md = hashlib.sha256()
        for f in files:
            md.update(f.name.encode('utf-8'))
            md.update(hashlib.sha256(f.data).digest())
        car = b''.join(f.data for f in files)
        return EncodedCar(car, 'bafy' + md.hexdigest()[0:32])

@pytest.fixture
def encoder():
    return FakeEncoder()

class FakeResponse:
    def __init__(self, status_code, body=b'', reason='OK'):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.json_called = False

    def json(self):
        self.json_called = True
        return json.loads(self.body)

class FakeTransport:
    # records what would be posted, answers with canned response
    def __init__(self, resp):
        self.resp = resp
        self.posts = []

    def post(self, url, headers=None, data=None):
        self.posts.append((url, headers, data))
        return self.resp

@pytest.fixture
def fake_transport():
    # factory: fake_transport(status, body, reason)
    def doit(status_code=200, body=b'{"token":"tok123"}', reason='OK'):
        return FakeTransport(FakeResponse(status_code, body, reason))
    return doit

# EOF
