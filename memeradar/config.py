import os

class Config:
    # --- API ---
    DEX_SCREENER_BASE_URL = "https://api.dexscreener.com"
    DEX_SCREENER_SEARCH = "/latest/dex/search"
    DEX_SCREENER_TOKENS = "/latest/dex/tokens"
    DEX_SCREENER_PROFILES = "/token-profiles/latest/v1"
    DEX_SCREENER_BOOSTS = "/token-boosts/top/v1"
    DEX_SCREENER_MAX_ADDRESSES = 30 # tokens endpoint accepts up to 30 comma-separated addresses

    # --- SCRAPER ---
    REQUEST_TIMEOUT = 10
    MAX_RETRIES = 3
    RETRY_DELAY_EXPONENT = 2
    USER_AGENT_ROTATION = True

    # --- CHAIN INDEXER (Helius) ---
    HELIUS_API_KEY = os.getenv("HELIUS_API_KEY", "")
    HELIUS_RPC_URL = os.getenv("HELIUS_RPC_URL", "https://mainnet.helius-rpc.com/")

    # --- WALLET DATA (Moralis) ---
    MORALIS_API_KEY = os.getenv("MORALIS_API_KEY", "")
    MORALIS_SOLANA_URL = "https://solana-gateway.moralis.io"

    # --- INPUT ---
    # Large caps are not memecoins; tickers and names are matched upper-cased.
    BLOCKED_TOKENS = [
        "BTC", "BITCOIN",
        "ETH", "ETHEREUM",
        "USDT", "TETHER",
        "USDC", "USD COIN",
        "BNB", "BINANCE",
        "XRP", "RIPPLE",
        "SOL", "SOLANA",
        "ADA", "CARDANO",
        "DOGE", "DOGECOIN",
        "DOT", "POLKADOT",
        "MATIC", "POLYGON",
        "AVAX", "AVALANCHE",
        "LINK", "CHAINLINK",
        "LTC", "LITECOIN",
        "ATOM", "COSMOS",
        "UNI", "UNISWAP",
        "SHIB",
    ]
    LARGE_CAP_THRESHOLD = 1_000_000_000

    SUPPORTED_CHAINS = [
        "solana",
        "ethereum",
        "bsc",
        "base",
        "arbitrum",
        "polygon",
        "avalanche",
        "fantom",
        "optimism",
    ]

    CHAIN_NAMES = {
        "solana": "Solana",
        "ethereum": "Ethereum",
        "bsc": "BNB Chain",
        "base": "Base",
        "arbitrum": "Arbitrum",
        "polygon": "Polygon",
        "avalanche": "Avalanche",
        "fantom": "Fantom",
        "optimism": "Optimism",
    }

    # --- RISK THRESHOLDS ---
    LIQUIDITY_LOW = 10_000     # < $10K liquidity = high risk
    LIQUIDITY_MEDIUM = 100_000 # < $100K liquidity = medium risk
    TXNS_LOW = 50
    TXNS_MEDIUM = 200
    VOLATILITY_HIGH = 50
    VOLATILITY_MEDIUM = 20

    RISK_WEIGHTS = {
        "rug_pull": 0.30,
        "liquidity": 0.25,
        "holder_concentration": 0.25,
        "volatility": 0.20,
    }
    OVERALL_HIGH = 7
    OVERALL_MEDIUM = 4

    # --- DEV TRUST ---
    DEV_TRUST_BASELINE = 40
    DEV_TRUSTED_MIN = 70
    DEV_AVERAGE_MIN = 40
    DEV_TOP10_LIMIT = 30         # percent
    DEV_RUG_MCAP = 5_000         # past coin peak below this = rugged
    DEV_SUCCESS_MCAP = 50_000    # past coin above this = successful
    DEV_HISTORY_LOOKUP_LIMIT = 30
    DEV_CACHE_TTL = 10 * 60      # seconds

    # --- WALLET TRUST ---
    WALLET_TRUST_BASELINE = 50
    WHALE_MIN_VALUE_USD = 100_000
    WALLET_CACHE_TTL = 5 * 60

    # --- STORAGE ---
    DB_PATH = os.getenv("MEMERADAR_DB_PATH", "memeradar/storage/cache.db")
    RECENT_LIMIT = 5

    # --- SERVER ---
    HOST = "0.0.0.0"
    PORT = int(os.getenv("PORT", 8080))

    # --- SYSTEM ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
