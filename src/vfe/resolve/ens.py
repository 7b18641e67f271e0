"""ENS name -> IPFS CID lookup over plain Ethereum JSON-RPC.

Two ``eth_call`` reads: the registry's ``resolver(bytes32)`` for the name's
node, then that resolver's ``contenthash(bytes32)``. Only EIP-1577 content
hashes in the ``ipfs-ns`` namespace resolve; every failure resolves to
``None``.
"""
from __future__ import annotations

import base64
import logging

import httpx
from Crypto.Hash import keccak

RESOLVER_SELECTOR = "0178b8bf"  # resolver(bytes32)
CONTENTHASH_SELECTOR = "bc1c58d1"  # contenthash(bytes32)
IPFS_NS_PREFIX = bytes.fromhex("e301")  # varint(0xe3)
CID_V1 = 0x01


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def namehash(name: str) -> bytes:
    """EIP-137 namehash. Labels are lowercased; full UTS-46 normalisation is not applied."""
    node = b"\x00" * 32
    if not name:
        return node
    for label in reversed(name.lower().split(".")):
        node = _keccak256(node + _keccak256(label.encode("utf-8")))
    return node


def decode_abi_bytes(result_hex: str) -> bytes:
    raw = bytes.fromhex(result_hex.removeprefix("0x"))
    if len(raw) < 64:
        return b""
    offset = int.from_bytes(raw[:32], "big")
    length = int.from_bytes(raw[offset:offset + 32], "big")
    return raw[offset + 32:offset + 32 + length]


def decode_contenthash(contenthash: bytes) -> str | None:
    """Return the CIDv1 (base32 multibase) carried by an ipfs-ns content hash, else ``None``."""
    if not contenthash.startswith(IPFS_NS_PREFIX):
        return None
    cid_bytes = contenthash[len(IPFS_NS_PREFIX):]
    if not cid_bytes or cid_bytes[0] != CID_V1:
        return None
    return "b" + base64.b32encode(cid_bytes).decode("ascii").lower().rstrip("=")


class EnsNameResolver:
    def __init__(self, rpc_url: str, registry_address: str, timeout: float = 10.0):
        self.rpc_url = rpc_url
        self.registry_address = registry_address
        self.timeout = timeout

    def _eth_call(self, to: str, data: str) -> str:
        body = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "eth_call",
            "params": [{"to": to, "data": data}, "latest"],
        }
        r = httpx.post(self.rpc_url, json=body, timeout=self.timeout)
        r.raise_for_status()
        doc = r.json()
        if doc.get("error"):
            raise RuntimeError(f"eth_call failed: {doc['error']}")
        return doc.get("result") or "0x"

    def resolve(self, name: str) -> str | None:
        try:
            node = namehash(name).hex()
            word = self._eth_call(self.registry_address, "0x" + RESOLVER_SELECTOR + node)
            resolver = "0x" + word.removeprefix("0x")[-40:]
            if int(resolver, 16) == 0:
                return None
            result = self._eth_call(resolver, "0x" + CONTENTHASH_SELECTOR + node)
            return decode_contenthash(decode_abi_bytes(result))
        except Exception as e:  # noqa: S112
            logging.error("ENS resolution error for %s: %s", name, e)
            return None
