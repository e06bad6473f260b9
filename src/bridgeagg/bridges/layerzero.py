"""LayerZero: volume comes from externally published transaction dumps, not from logs."""

BRIDGE_NAME = "layerzero"
PROCESSED_FILES_KEY = "layerzero_processed_csv"

# Chain names as they appear in the dumps' chainSource / chainDestination columns (lowercased)
LAYERZERO_CHAINS: list[str] = [
    "ethereum",
    "arbitrum",
    "optimism",
    "base",
    "bsc",
    "polygon",
    "avalanche",
    "fantom",
    "gnosis",
    "celo",
    "moonbeam",
    "linea",
    "mantle",
    "scroll",
    "zksync",
    "blast",
    "metis",
    "sei",
    "aptos",
    "solana",
]
