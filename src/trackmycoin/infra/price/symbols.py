"""Coin symbol → CoinGecko ID mapping."""

# Keys are lowercase ticker symbols
SYMBOL_TO_COINGECKO: dict[str, str] = {
    "btc": "bitcoin",
    "eth": "ethereum",
    "usdt": "tether",
    "bnb": "binancecoin",
    "sol": "solana",
    "xrp": "ripple",
    "usdc": "usd-coin",
    "ada": "cardano",
    "avax": "avalanche-2",
    "doge": "dogecoin",
    "dot": "polkadot",
    "matic": "matic-network",
    "link": "chainlink",
    "uni": "uniswap",
    "ltc": "litecoin",
    "atom": "cosmos",
    "etc": "ethereum-classic",
    "xlm": "stellar",
    "bch": "bitcoin-cash",
    "near": "near",
    "algo": "algorand",
    "vet": "vechain",
    "icp": "internet-computer",
    "fil": "filecoin",
    "apt": "aptos",
    "hbar": "hedera-hashgraph",
    "arb": "arbitrum",
    "op": "optimism",
    "ldo": "lido-dao",
    "imx": "immutable-x",
    "stx": "blockstack",
    "inj": "injective-protocol",
    "sui": "sui",
    "sei": "sei-network",
    "tia": "celestia",
    "xvg": "verge",
    "trx": "tron",
    "shib": "shiba-inu",
    "dai": "dai",
    "wbtc": "wrapped-bitcoin",
    "leo": "leo-token",
    "ton": "the-open-network",
    "okb": "okb",
}


def resolve_coingecko_id(symbol: str) -> str:
    """Map a ticker (any case, surrounding spaces allowed) to its CoinGecko ID.

    Unknown tickers come back normalized but otherwise unchanged, which is
    already the right ID for many coins.
    """
    key = symbol.strip().lower()
    return SYMBOL_TO_COINGECKO.get(key, key)
