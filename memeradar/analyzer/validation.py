import re
from typing import Optional
from memeradar.config import Config
from memeradar.models.token import ValidationResult

# Shape checks only, no checksum verification.
EVM_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")
SOLANA_ADDRESS_RE = re.compile(r"[1-9A-HJ-NP-Za-km-z]{32,44}")

EMPTY_INPUT_ERROR = "Please enter a token ticker or contract address"
MULTIPLE_TOKENS_ERROR = "Please enter only ONE token at a time"
BLOCKED_TOKEN_ERROR = (
    "This AI Agent only analyzes MEMECOINS. "
    "Large-cap tokens like BTC, ETH, SOL are not supported."
)


def is_solana_address(value: Optional[str]) -> bool:
    return bool(value) and SOLANA_ADDRESS_RE.fullmatch(value) is not None


def is_contract_address(value: Optional[str]) -> bool:
    if not value:
        return False
    return EVM_ADDRESS_RE.fullmatch(value) is not None or is_solana_address(value)


def is_blocked_token(ticker: Optional[str]) -> bool:
    if not ticker:
        return False
    return ticker.strip().upper() in Config.BLOCKED_TOKENS


def validate_input(raw: Optional[str]) -> ValidationResult:
    """
    Classifies user input as a contract address or a ticker.
    Only the first failing check is reported.
    """
    if not raw or not raw.strip():
        return ValidationResult(valid=False, error=EMPTY_INPUT_ERROR)

    trimmed = raw.strip()

    if "," in trimmed or " " in trimmed:
        return ValidationResult(valid=False, error=MULTIPLE_TOKENS_ERROR)

    if is_contract_address(trimmed):
        return ValidationResult(valid=True, type="address")

    if is_blocked_token(trimmed):
        return ValidationResult(valid=False, error=BLOCKED_TOKEN_ERROR)

    return ValidationResult(valid=True, type="ticker")
