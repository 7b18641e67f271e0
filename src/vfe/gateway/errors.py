from __future__ import annotations


class GatewayError(Exception):
    """Terminal failure of one intercepted request.

    Every subclass maps to the HTTP status the gateway answers with; none of
    them is retried.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoAnchor(GatewayError):
    status_code = 400

    def __init__(self, message: str = "Missing Trusted CID. Please load the page with ?cid= parameter first."):
        super().__init__(message)


class InvalidContentPath(GatewayError):
    status_code = 400


class FetchFailed(GatewayError):
    status_code = 500


class VerificationFailed(GatewayError):
    status_code = 500


class UpstreamStatus(GatewayError):
    def __init__(self, code: int, status_text: str = ""):
        detail = status_text or f"status {code}"
        super().__init__(f"IPFS fetch failed: {detail}")
        self.status_code = code
        self.status_text = status_text


__all__ = ["GatewayError", "NoAnchor", "InvalidContentPath", "FetchFailed", "VerificationFailed", "UpstreamStatus"]
