from __future__ import annotations

from typing import Literal
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


class TrustAnchor(BaseModel):
    model_config = ConfigDict(frozen=True)

    cid: str
    established_at_ms: int


class InterceptedRequest(BaseModel):
    method: str
    scheme: str = "http"
    path: str = "/"
    query: dict[str, str] = Field(default_factory=dict)


class ContentPath(BaseModel):
    model_config = ConfigDict(frozen=True)

    scheme: str
    cid: str
    path: str  # request path after index substitution, always starts with "/"

    @property
    def url(self) -> str:
        # path holds the decoded request path; re-quote so "#", "?" and "%" stay part of the name
        return f"{self.scheme}://{self.cid}{quote(self.path, safe='/')}"

    def __str__(self) -> str:
        return self.url


class FetchResult(BaseModel):
    """What the verified-fetch collaborator hands back for one content path."""

    ok: bool
    status: int
    status_text: str = ""
    body: bytes = b""
    verified: bool = False


class VerifiedPayload(BaseModel):
    # There is no unverified payload: construction with verified=False is rejected.
    model_config = ConfigDict(frozen=True)

    body: bytes
    mime_type: str
    verified: Literal[True] = True


class MarkerSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    meta_tag: str = '<meta name="verified-frontend" content="VERIFIED">'
    data_attribute: str = ' data-verified="VERIFIED"'
    badge: str = '<div class="verified-badge">VERIFIED</div>'
    style_block: str = """
    <style>
      .verified-badge {
        position: fixed;
        top: 10px;
        right: 10px;
        background: linear-gradient(135deg, #10b981 0%, #059669 100%);
        color: white;
        padding: 8px 16px;
        border-radius: 20px;
        font-size: 12px;
        font-weight: 600;
        z-index: 10000;
        box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1);
        display: flex;
        align-items: center;
        gap: 6px;
        font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      }
      .verified-badge::before {
        content: '\\2713';
        background: white;
        color: #10b981;
        width: 18px;
        height: 18px;
        border-radius: 50%;
        display: flex;
        align-items: center;
        justify-content: center;
        font-weight: bold;
        font-size: 12px;
      }
    </style>
    """
