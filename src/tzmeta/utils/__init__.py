"""Codec, HTTP, address and RPC utilities.

The utils layer sits in the middle of the DAG, next to
[tzmeta.core][tzmeta.core] and [tzmeta.chain][tzmeta.chain], and depends only
on [tzmeta.models][tzmeta.models] and third-party libraries.

Attributes:
    codec: Strict hex -> UTF-8 -> JSON decoding of stored values.
    http: [Fetcher][tzmeta.utils.http.Fetcher] interface and its aiohttp
        implementation with bounded body reads and optional SOCKS proxy.
    address: Base58check validation of Tezos addresses.
    rpc: Chain id lookup against a node RPC endpoint.

Note:
    The utils layer has **zero** imports from ``tzmeta.core`` or
    ``tzmeta.resolver``. Failures surface as builtin or ``aiohttp``
    exceptions and are translated by the resolver.

Examples:
    ```python
    from tzmeta.utils.codec import decode_hex_json
    from tzmeta.utils.http import AiohttpFetcher
    ```
"""
