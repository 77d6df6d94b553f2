"""
Metadata resolution orchestrator.

Given a contract address and an optional key, works out where the
metadata of a Tezos contract or token lives and assembles it, following
TZIP-16 pointers, TZIP-12 token big-maps and callback entrypoints.

Resolution of one hop:

1. Load the contract; a missing contract raises
   [ContractNotFoundError][tzmeta.core.exceptions.ContractNotFoundError].
2. Classify it with the [ShapeDispatcher][tzmeta.resolver.dispatch.ShapeDispatcher].
3. Run the strategy for that shape:

    ``GENERIC_STORE``
        With a key, decode that entry. Without a key, follow the ``""``
        pointer entry: fetch external, IPFS or checksummed URLs, read
        another key of the same store, or recurse into another contract.
    ``TOKEN_INDEXED_BIGMAP``
        Read the token entry (default token ``"0"``); follow it as a
        pointer when it embeds one.
    ``ENTRYPOINT_WITH_CALLBACK`` / ``REGISTRY_ENTRYPOINT_WITH_CALLBACK``
        Invoke the entrypoint with a callback contract, wait for
        confirmation and read the answer from the callback's storage.
    ``RAW_FALLBACK``
        Return the storage (or one field of it).

Cross-contract references and registry redirects recurse. Every hop is
recorded as an ``(address, key)`` pair; revisiting a pair raises
[ReferenceCycleError][tzmeta.core.exceptions.ReferenceCycleError] and more
than ``max_depth`` hops raise
[DepthExceededError][tzmeta.core.exceptions.DepthExceededError].

See Also:
    [ResolverConfig][tzmeta.core.config.ResolverConfig]: Gateway, depth,
        confirmation and callback settings.
    [NetworkResolver][tzmeta.resolver.network.NetworkResolver]: Network tag
        checks on cross-contract references.
    [tzmeta.core.exceptions][]: Every error raised here.

Examples:
    ```python
    from tzmeta import MetadataResolver, NetworkContext

    resolver = MetadataResolver.from_yaml("config/resolver.yaml")
    context = NetworkContext(client=client, network_id="mainnet")

    metadata = await resolver.resolve("KT1...", context)
    token = await resolver.resolve("KT1...", context, key="3")
    ```
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Self
from urllib.parse import unquote

import aiohttp

from tzmeta.chain.base import is_pointer, read_entry
from tzmeta.core.config import ResolverConfig
from tzmeta.core.exceptions import (
    ChecksumMismatchError,
    ContractNotFoundError,
    DecodingError,
    DepthExceededError,
    FetchCause,
    FetchResponse,
    FetchURLError,
    InvalidContractAddressError,
    NotEnoughCredentialsError,
    ReferenceCycleError,
)
from tzmeta.core.logger import Logger
from tzmeta.core.metrics import FETCH_COUNTER, RESOLVE_COUNTER, RESOLVE_DURATION_SECONDS
from tzmeta.models.constants import (
    DEFAULT_TOKEN_ID,
    METADATA_FIELD,
    POINTER_KEY,
    TOKEN_INFO_FIELD,
    TOKEN_METADATA_ENTRYPOINT,
    TOKEN_METADATA_FIELD,
    TOKEN_METADATA_MAP_FIELD,
    TOKEN_METADATA_REGISTRY_ENTRYPOINT,
    ContractShape,
)
from tzmeta.models.uri import (
    ChecksummedUrl,
    CrossContractRef,
    ExternalUrl,
    IpfsUri,
    SameStoreKey,
    classify,
)
from tzmeta.utils.address import validate_contract_address
from tzmeta.utils.codec import decode_hex_json, hex_to_text
from tzmeta.utils.http import AiohttpFetcher, Fetcher

from .dispatch import ShapeDispatcher
from .network import NetworkResolver


if TYPE_CHECKING:
    from pathlib import Path

    from tzmeta.chain.base import Contract
    from tzmeta.models.network import NetworkContext


Trail = tuple[tuple[str, str | None], ...]
"""Ordered ``(address, key)`` pairs visited by one resolution call."""

_TOKEN_RECORD_FIELDS = ("token_id", "symbol", "name", "decimals", "extras")


class MetadataResolver:
    """Resolves TZIP-16 and TZIP-12 metadata for Tezos contracts.

    Holds no per-call state: concurrent ``resolve`` calls are independent
    and nothing is cached between them.

    Args:
        config: Resolver settings. Defaults to ``ResolverConfig()``.
        fetcher: HTTP fetcher for off-chain metadata. Defaults to an
            [AiohttpFetcher][tzmeta.utils.http.AiohttpFetcher] built from
            ``config.http``.
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        fetcher: Fetcher | None = None,
    ) -> None:
        self._config = config or ResolverConfig()
        http = self._config.http
        self._fetcher = fetcher or AiohttpFetcher(
            timeout=http.timeout, max_size=http.max_size, proxy_url=http.proxy_url
        )
        self._dispatcher = ShapeDispatcher()
        self._networks = NetworkResolver(self._config.networks)
        self._logger = Logger("tzmeta.resolver")

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @classmethod
    def from_yaml(cls, config_path: str | Path, **kwargs: Any) -> Self:
        """Create a resolver from a YAML configuration file.

        See Also:
            [ResolverConfig.from_yaml()][tzmeta.core.config.ResolverConfig.from_yaml]
        """
        return cls(ResolverConfig.from_yaml(config_path), **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> Self:
        """Create a resolver from a configuration dictionary."""
        return cls(ResolverConfig.from_dict(data), **kwargs)

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    async def resolve(
        self,
        address: str,
        context: NetworkContext,
        key: str | None = None,
    ) -> Any:
        """Resolve the metadata of *address*.

        Args:
            address: Contract address to start from.
            context: Chain client and network expectations for this call.
            key: Metadata store key or token id. ``None`` follows the
                contract's default metadata location (token ``"0"`` for
                token-indexed contracts).

        Returns:
            The metadata: a JSON value, a storage object (direct TZIP-16
            storage or raw fallback), or ``None`` when the contract defines
            no metadata at that location.

        Raises:
            TzMetaError: One of the [tzmeta.core.exceptions][] subclasses.
        """
        start = time.monotonic()
        try:
            return await self._resolve(address, context, key, ())
        finally:
            RESOLVE_DURATION_SECONDS.observe(time.monotonic() - start)

    async def _resolve(
        self,
        address: str,
        context: NetworkContext,
        key: str | None,
        trail: Trail,
    ) -> Any:
        hop = (address, key)
        if hop in trail:
            raise ReferenceCycleError(address, key)
        if len(trail) > self._config.max_depth:
            raise DepthExceededError(self._config.max_depth)
        trail = (*trail, hop)

        contract = await context.client.load_contract(address)
        if contract is None:
            raise ContractNotFoundError(address)
        storage = await contract.storage()

        shape = self._dispatcher.classify(contract, storage)
        RESOLVE_COUNTER.labels(shape=shape).inc()
        self._logger.debug("shape_selected", address=address, key=key, shape=shape, depth=len(trail))

        if shape is ContractShape.GENERIC_STORE:
            return await self._resolve_store(storage[METADATA_FIELD], context, key, trail)
        if shape is ContractShape.TOKEN_INDEXED_BIGMAP:
            return await self._resolve_token(storage[TOKEN_METADATA_FIELD], context, key, trail)
        if shape is ContractShape.ENTRYPOINT_WITH_CALLBACK:
            return await self._resolve_entrypoint(contract, context, key)
        if shape is ContractShape.REGISTRY_ENTRYPOINT_WITH_CALLBACK:
            return await self._resolve_registry(contract, storage, context, key, trail)
        return self._raw(storage, key)

    # -------------------------------------------------------------------------
    # TZIP-16 store
    # -------------------------------------------------------------------------

    async def _resolve_store(
        self,
        store: Any,
        context: NetworkContext,
        key: str | None,
        trail: Trail,
    ) -> Any:
        """Resolve a generic metadata store, by *key* or through its pointer entry."""
        if key is not None:
            # an absent entry is a decoding failure here, not absence
            return self._decode_json(await read_entry(store, unquote(key)))

        pointer = await read_entry(store, POINTER_KEY)
        if not isinstance(pointer, str):
            return store

        location = self._decode_text(pointer)
        uri = classify(location)
        self._logger.debug("pointer_classified", location=location, kind=uri.kind)

        if isinstance(uri, ExternalUrl):
            url = uri.url if uri.url.startswith(("http://", "https://")) else f"https://{uri.url}"
            return await self._fetch_json(url)
        if isinstance(uri, IpfsUri):
            return await self._fetch_json(uri.gateway_url(self._config.ipfs_gateway))
        if isinstance(uri, ChecksummedUrl):
            return await self._fetch_json(uri.url, sha256_hex=uri.sha256_hex)
        if isinstance(uri, SameStoreKey):
            entry = await read_entry(store, unquote(uri.key))
            return None if entry is None else self._decode_json(entry)
        if isinstance(uri, CrossContractRef):
            return await self._follow_reference(uri, context, trail)
        return None

    async def _follow_reference(
        self,
        ref: CrossContractRef,
        context: NetworkContext,
        trail: Trail,
    ) -> Any:
        reason = validate_contract_address(ref.address)
        if reason is not None:
            raise InvalidContractAddressError(ref.address, reason)
        narrowed = await self._networks.check_tag(ref.network_tag, context)
        self._logger.debug(
            "reference_followed",
            address=ref.address,
            network=narrowed.network_id,
            key=ref.key,
        )
        return await self._resolve(ref.address, narrowed, ref.key, trail)

    # -------------------------------------------------------------------------
    # TZIP-12 token big-map
    # -------------------------------------------------------------------------

    async def _resolve_token(
        self,
        token_metadata: Any,
        context: NetworkContext,
        key: str | None,
        trail: Trail,
    ) -> Any:
        entry = await read_entry(token_metadata, key or DEFAULT_TOKEN_ID)
        if entry is None:
            return None
        if await is_pointer(entry):
            return await self._resolve_store(entry, context, None, trail)
        if isinstance(entry, Mapping):
            for field in (TOKEN_METADATA_MAP_FIELD, TOKEN_INFO_FIELD):
                nested = entry.get(field)
                if nested is not None and await is_pointer(nested):
                    return await self._resolve_store(nested, context, None, trail)
        return entry

    # -------------------------------------------------------------------------
    # Callback entrypoints
    # -------------------------------------------------------------------------

    async def _callback_for(
        self,
        context: NetworkContext,
        defaults: Mapping[str, str],
        override: str | None,
        field: str,
    ) -> str:
        chain_id = await context.client.get_chain_id()
        callback = defaults.get(chain_id) or override
        if not callback:
            raise NotEnoughCredentialsError(field)
        return callback

    async def _invoke(self, contract: Contract, entrypoint: str, *args: Any) -> None:
        self._logger.info("entrypoint_invoked", address=contract.address, entrypoint=entrypoint)
        operation = await contract.invoke(entrypoint, *args)
        await operation.confirm(self._config.confirmations)

    async def _callback_storage(self, context: NetworkContext, callback: str) -> Any:
        callback_contract = await context.client.load_contract(callback)
        if callback_contract is None:
            raise ContractNotFoundError(callback)
        return await callback_contract.storage()

    async def _resolve_entrypoint(
        self,
        contract: Contract,
        context: NetworkContext,
        key: str | None,
    ) -> dict[str, Any] | None:
        callback = await self._callback_for(
            context,
            self._config.token_metadata_callbacks,
            context.token_metadata_callback,
            "token_metadata_callback",
        )
        token_id = key or DEFAULT_TOKEN_ID
        await self._invoke(contract, TOKEN_METADATA_ENTRYPOINT, callback, [token_id])

        records = await self._callback_storage(context, callback)
        if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
            return None
        for record in records:
            fields = _token_record_fields(record)
            if fields is not None and str(fields["token_id"]) == token_id:
                return {name: fields[name] for name in _TOKEN_RECORD_FIELDS[1:]}
        return None

    async def _resolve_registry(
        self,
        contract: Contract,
        storage: Any,
        context: NetworkContext,
        key: str | None,
        trail: Trail,
    ) -> Any:
        callback = await self._callback_for(
            context,
            self._config.registry_callbacks,
            context.registry_callback,
            "registry_callback",
        )
        await self._invoke(contract, TOKEN_METADATA_REGISTRY_ENTRYPOINT, callback)

        registry = await self._callback_storage(context, callback)
        if isinstance(registry, Mapping):
            for target, source in registry.items():
                if source == contract.address:
                    self._logger.debug("registry_redirect", address=contract.address, target=target)
                    return await self._resolve(target, context, None, trail)
        return self._raw(storage, key)

    # -------------------------------------------------------------------------
    # Raw storage
    # -------------------------------------------------------------------------

    @staticmethod
    def _raw(storage: Any, key: str | None) -> Any:
        if key:
            return storage.get(key) if isinstance(storage, Mapping) else None
        return storage

    # -------------------------------------------------------------------------
    # Fetch and decode
    # -------------------------------------------------------------------------

    async def _fetch_json(self, url: str, *, sha256_hex: str | None = None) -> Any:
        """GET *url* and parse the body as JSON.

        Raises:
            FetchURLError: Transport failure or non-2xx status.
            ChecksumMismatchError: ``verify_checksums`` is on and the body
                does not hash to *sha256_hex*.
            DecodingError: The body is not JSON.
        """
        try:
            response = await self._fetcher.get(url)
        except (aiohttp.ClientError, TimeoutError, OSError, ValueError) as e:
            FETCH_COUNTER.labels(outcome="transport_error").inc()
            self._logger.warning("fetch_failed", url=url, error=str(e), error_type=type(e).__name__)
            raise FetchURLError(url, FetchCause(e)) from e

        if not response.ok:
            FETCH_COUNTER.labels(outcome="http_error").inc()
            self._logger.warning("fetch_rejected", url=url, status=response.status)
            raise FetchURLError(url, FetchResponse(response.status, response.reason))

        if sha256_hex is not None and self._config.verify_checksums:
            actual = hashlib.sha256(response.body).hexdigest()
            if actual != sha256_hex:
                FETCH_COUNTER.labels(outcome="checksum_mismatch").inc()
                raise ChecksumMismatchError(url, sha256_hex, actual)

        FETCH_COUNTER.labels(outcome="ok").inc()
        try:
            return response.json()
        except ValueError as e:
            raise DecodingError(f"Cannot decode JSON fetched from {url}: {e}") from e

    @staticmethod
    def _decode_text(value: Any) -> str:
        try:
            return hex_to_text(value)
        except ValueError as e:
            raise DecodingError(f"Cannot decode stored text: {e}") from e

    @staticmethod
    def _decode_json(value: Any) -> Any:
        try:
            return decode_hex_json(value)
        except ValueError as e:
            raise DecodingError(f"Cannot decode stored JSON: {e}") from e


def _token_record_fields(record: Any) -> dict[str, Any] | None:
    """Map a callback storage record to named token fields.

    Records are positional ``(token_id, symbol, name, decimals, extras)``
    tuples, decoded either as sequences or as mappings keyed ``"0"`` .. ``"4"``.
    """
    if isinstance(record, Mapping):
        values = [record.get(str(index)) for index in range(len(_TOKEN_RECORD_FIELDS))]
        if values[0] is None:
            return None
    elif isinstance(record, Sequence) and not isinstance(record, (str, bytes)):
        if len(record) < len(_TOKEN_RECORD_FIELDS):
            return None
        values = list(record)
    else:
        return None
    return dict(zip(_TOKEN_RECORD_FIELDS, values, strict=False))


async def resolve_metadata(
    address: str,
    context: NetworkContext,
    key: str | None = None,
    *,
    config: ResolverConfig | None = None,
    fetcher: Fetcher | None = None,
) -> Any:
    """Resolve metadata with a one-off [MetadataResolver][tzmeta.resolver.resolver.MetadataResolver].

    Examples:
        ```python
        metadata = await resolve_metadata("KT1...", NetworkContext(client=client))
        ```
    """
    return await MetadataResolver(config, fetcher=fetcher).resolve(address, context, key)
