from enum import Enum


class ChainProtocol(str, Enum):
    """Protocol family of a chain as listed in the Hyperlane registry metadata."""

    ETHEREUM = "ethereum"
    COSMOS = "cosmos"
    COSMOS_NATIVE = "cosmosnative"
    SEALEVEL = "sealevel"
    STARKNET = "starknet"
    RADIX = "radix"
