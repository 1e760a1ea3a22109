#
# (c) Copyright 2022 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Exceptions
#

class ValidationError(ValueError):
    # metadata doesn't have the required shape; nothing was encoded
    def __init__(self, msg, path=None):
        self.path = list(path or [])
        super().__init__(msg)

class EncodingError(RuntimeError):
    # archive (CAR) encoder failed, not retried
    pass

class SigningError(RuntimeError):
    # signer refused or failed; message is the signer's own
    pass

class RequestError(RuntimeError):
    def __init__(self, status, status_text):
        self.status = status
        self.status_text = status_text
        super().__init__(f'request error: [{status}]: {status_text}')

class MalformedResponseError(RuntimeError):
    # 2xx response, but no usable token in it
    pass

# EOF
