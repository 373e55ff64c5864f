"""Static chain id metadata.

Names follow the ethereum-lists short names. Only chains with an ENS registry
carry an ENS address.
"""

from functools import cache
from types import MappingProxyType

from typing import NamedTuple


ENS_REGISTRY = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"

UNKNOWN_CHAIN_NAME = "unknown"


class ChainInfo(NamedTuple):
    """Name and ENS registry of a chain."""

    name: str
    ens_address: str | None = None


_CHAINS: tuple[tuple[int, ChainInfo], ...] = (
    (1, ChainInfo("eth", ENS_REGISTRY)),
    (3, ChainInfo("rop", ENS_REGISTRY)),
    (4, ChainInfo("rin", ENS_REGISTRY)),
    (5, ChainInfo("gor", ENS_REGISTRY)),
    (10, ChainInfo("oeth")),
    (25, ChainInfo("cro")),
    (30, ChainInfo("rsk")),
    (31, ChainInfo("trsk")),
    (56, ChainInfo("bnb")),
    (97, ChainInfo("bnbt")),
    (100, ChainInfo("gno")),
    (137, ChainInfo("MATIC")),
    (250, ChainInfo("ftm")),
    (324, ChainInfo("zksync")),
    (1101, ChainInfo("zkevm")),
    (1284, ChainInfo("mbeam")),
    (8453, ChainInfo("base")),
    (17000, ChainInfo("holesky", ENS_REGISTRY)),
    (42161, ChainInfo("arb1")),
    (42220, ChainInfo("celo")),
    (43114, ChainInfo("avax")),
    (59144, ChainInfo("linea")),
    (80001, ChainInfo("maticmum")),
    (534352, ChainInfo("scr")),
    (11155111, ChainInfo("sep", ENS_REGISTRY)),
)


@cache
def chains_info() -> MappingProxyType[int, ChainInfo]:
    """Read-only chain id to ChainInfo mapping, built on first use."""
    return MappingProxyType(dict(_CHAINS))


def lookup_chain(chain_id: int) -> ChainInfo:
    """Return metadata for a chain id, falling back to an unknown entry."""
    return chains_info().get(chain_id, ChainInfo(UNKNOWN_CHAIN_NAME))


__all__ = ["ENS_REGISTRY", "ChainInfo", "chains_info", "lookup_chain"]
