from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="VFE_")

    # Verifying IPFS node (HTTP gateway of a local node that hash-checks blocks)
    node_url: str = "http://127.0.0.1:8080"
    node_verifies_blocks: bool = True
    fetch_timeout_seconds: float = 30.0

    # Content addressing
    content_scheme: str = "ipfs"
    index_path: str = "/index.html"
    cid_query_param: str = "cid"

    # Interception scope; list values may be comma separated in env
    handled_schemes: Annotated[list[str], NoDecode] = ["http", "https"]
    exempt_paths: Annotated[list[str], NoDecode] = [
        "/bootloader.html",  # loader page, must run before any anchor exists
        "/config.json",  # name -> CID mapping read by the loader
        "/sw.bundle.js",  # gateway's own worker bundle
    ]

    cache_control: str = "public, max-age=31536000, immutable"

    # Name resolution
    name_config_path: Path = Path("./config.json")
    eth_rpc_url: str | None = None
    ens_registry_address: str = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"
    resolver_timeout_seconds: float = 10.0

    @field_validator("handled_schemes", "exempt_paths", mode="before")
    @classmethod
    def _split_csv(cls, value):
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

settings = Settings()
