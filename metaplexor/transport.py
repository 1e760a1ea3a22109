# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# transport.py
#
# HTTP connection to the token issuer. Uses 'requests'.
#
# - proxies: set HTTP_PROXY / HTTPS_PROXY in environment, which is directly
#   implemented in requests, see
#   <https://2.python-requests.org/en/master/user/advanced/#proxies>
# - no timeouts or retries here: signing needs a human, so never replay a request
#
import requests
from urllib3.util import SKIP_HEADER

# Change this to see traffic details
VERBOSE = False

class HTTPTransport:

    def __init__(self, session=None):
        # caller's session is borrowed: not modified, not closed
        self.own_session = session is None
        self.ses = session or requests.Session()

    def post(self, url, headers=None, data=None):
        # returns the requests.Response, whatever the status
        if VERBOSE:
            print(f">> POST {url} ({len(data or b'')} bytes)")
            for k, v in (headers or {}).items():
                print(f"   {k}: {v}")

        # I want no user-agent header at all, so have to
        # use this one strange hack into urllib3...
        headers = dict(headers or {})
        headers['user-agent'] = SKIP_HEADER

        resp = self.ses.post(url, headers=headers, data=data)

        if VERBOSE:
            print(f"<< {resp.status_code} {resp.reason}")

        return resp

    def close(self):
        if self.own_session:
            self.ses.close()

# EOF
