"""
Metadata location strings and their classification.

A TZIP-16 pointer entry decodes to a string that says *where* the metadata
lives. [classify][tzmeta.models.uri.classify] maps every such string to
exactly one frozen variant:

```text
ExternalUrl        https://example.com/meta.json, example.com/x, http://localhost:8080
IpfsUri            ipfs://<cid>
ChecksummedUrl     sha256://0x<64 hex>/<percent-encoded url>
SameStoreKey       tezos-storage:<key>
CrossContractRef   tezos-storage://<KT address>[.<network tag>]/<key>
OpaqueUri          anything else
```

Note:
    Classification is pure string analysis and never touches the network.
    The order of the tests matters: the external URL grammar is checked
    first because a URL can satisfy the character classes of the later
    patterns. Keys are kept verbatim; percent-decoding happens only when a
    key is looked up in a store.

See Also:
    [UriKind][tzmeta.models.constants.UriKind]: Variant tags.
    [MetadataResolver][tzmeta.resolver.resolver.MetadataResolver]: Acts on
        the classified variant.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar
from urllib.parse import unquote

from .constants import UriKind


STORAGE_PREFIX = "tezos-storage:"

_URL_PATTERN = re.compile(
    r"(?:https?://)?[\w.-]+(?:\.[\w.-]+)+[\w\-._~:/?#\[\]@!$&'()*+,;=.]+",
    re.ASCII,
)
_LOCALHOST_PATTERN = re.compile(r"https?://localhost:[0-9]+")
_IPFS_PATTERN = re.compile(r"ipfs://([0-9A-Za-z]+)")
_SHA256_PATTERN = re.compile(
    r"sha256://0x([0-9a-f]{64})/"
    r"((?:https?:(?:%2[fF]){2})?[\w.-]+(?:\.[\w.-]+)+[\w\-._~:%?#\[\]@!$&'()*+,;=.]+)",
    re.ASCII,
)
_STORAGE_PATTERN = re.compile(r"^tezos-storage:.", re.DOTALL)
_CROSS_CONTRACT_PATTERN = re.compile(r"^//(KT[A-Za-z0-9]+)(\.[A-Za-z0-9]+)?/([^/]+)")


def is_external_url(value: str) -> bool:
    """Return True if *value* satisfies the external URL grammar.

    The host and path branch only anchors at the start, so percent-encoded
    or non-ASCII text after the first path character still counts. A
    ``localhost:<port>`` URL must match in full.
    """
    return (
        _URL_PATTERN.match(value) is not None
        or _LOCALHOST_PATTERN.fullmatch(value) is not None
    )


@dataclass(frozen=True, slots=True)
class ExternalUrl:
    """Absolute or scheme-less HTTP(S) URL, or a ``localhost:<port>`` URL."""

    kind: ClassVar[UriKind] = UriKind.EXTERNAL_URL

    url: str


@dataclass(frozen=True, slots=True)
class IpfsUri:
    """IPFS content identifier reached through an HTTP gateway."""

    kind: ClassVar[UriKind] = UriKind.IPFS

    cid: str

    def gateway_url(self, gateway: str) -> str:
        """Build the HTTP URL serving this content from *gateway*.

        Args:
            gateway: Gateway base URL, e.g. ``https://ipfs.io/ipfs/``.
                A missing trailing slash is added.

        Returns:
            The gateway URL for the content identifier.
        """
        base = gateway if gateway.endswith("/") else gateway + "/"
        return base + self.cid


@dataclass(frozen=True, slots=True)
class ChecksummedUrl:
    """URL paired with the SHA-256 digest its content is expected to have.

    Attributes:
        sha256_hex: Lowercase 64-character hex digest.
        url: Percent-decoded URL to fetch.
    """

    kind: ClassVar[UriKind] = UriKind.CHECKSUMMED_URL

    sha256_hex: str
    url: str


@dataclass(frozen=True, slots=True)
class SameStoreKey:
    """Key to look up in the metadata store of the current contract."""

    kind: ClassVar[UriKind] = UriKind.SAME_STORE_KEY

    key: str


@dataclass(frozen=True, slots=True)
class CrossContractRef:
    """Reference to a key in another contract's metadata store.

    Attributes:
        address: ``KT1`` contract address, not yet validated.
        network_tag: Chain id or network name the reference targets, or
            ``None`` when the reference does not assert one.
        key: Store key in the target contract, still percent-encoded.
    """

    kind: ClassVar[UriKind] = UriKind.CROSS_CONTRACT_REF

    address: str
    network_tag: str | None
    key: str


@dataclass(frozen=True, slots=True)
class OpaqueUri:
    """String recognized by none of the known schemes."""

    kind: ClassVar[UriKind] = UriKind.OPAQUE

    raw: str


MetadataUri = ExternalUrl | IpfsUri | ChecksummedUrl | SameStoreKey | CrossContractRef | OpaqueUri


def _classify_storage_key(raw: str) -> SameStoreKey | CrossContractRef:
    remainder = raw.replace(STORAGE_PREFIX, "", 1)
    match = _CROSS_CONTRACT_PATTERN.match(remainder)
    if match is None:
        return SameStoreKey(key=remainder)
    address, raw_tag, key = match.groups()
    return CrossContractRef(
        address=address,
        network_tag=raw_tag[1:] if raw_tag else None,
        key=key,
    )


def classify(raw: str) -> MetadataUri:
    """Classify a metadata location string.

    Args:
        raw: Decoded text of a TZIP-16 pointer entry.

    Returns:
        Exactly one [MetadataUri][tzmeta.models.uri.MetadataUri] variant;
        [OpaqueUri][tzmeta.models.uri.OpaqueUri] when nothing matches.

    Examples:
        ```python
        classify("ipfs://QmHash")                # IpfsUri(cid='QmHash')
        classify("tezos-storage:here")           # SameStoreKey(key='here')
        classify("tezos-storage://KT1abc.mainnet/foo")
        # CrossContractRef(address='KT1abc', network_tag='mainnet', key='foo')
        ```
    """
    if is_external_url(raw):
        return ExternalUrl(url=raw)

    ipfs = _IPFS_PATTERN.fullmatch(raw)
    if ipfs is not None:
        return IpfsUri(cid=ipfs.group(1))

    checksummed = _SHA256_PATTERN.fullmatch(raw)
    if checksummed is not None:
        digest, encoded_url = checksummed.groups()
        url = unquote(encoded_url)
        if is_external_url(url):
            return ChecksummedUrl(sha256_hex=digest, url=url)

    if _STORAGE_PATTERN.match(raw):
        return _classify_storage_key(raw)

    return OpaqueUri(raw=raw)
