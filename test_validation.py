from memeradar.analyzer.validation import (
    validate_input, is_contract_address, is_solana_address, is_blocked_token,
    EMPTY_INPUT_ERROR, MULTIPLE_TOKENS_ERROR, BLOCKED_TOKEN_ERROR,
)
from memeradar.analyzer.formatting import (
    format_currency, format_price, format_percentage, format_number, truncate_address,
)

EVM_ADDRESS = "0x6982508145454ce325ddbe47a25d4ec3d2311933"
SOL_ADDRESS = "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm"


def test_validate_blocked_ticker():
    result = validate_input("BTC")
    assert not result.valid
    assert result.error == BLOCKED_TOKEN_ERROR
    assert is_blocked_token(" sol ")


def test_validate_addresses():
    assert validate_input(EVM_ADDRESS).type == "address"
    assert validate_input(f"  {SOL_ADDRESS}  ").type == "address"
    assert is_solana_address(SOL_ADDRESS)
    assert not is_solana_address(EVM_ADDRESS)


def test_validate_rejects_multiple_tokens():
    assert validate_input("wif sol").error == MULTIPLE_TOKENS_ERROR
    assert validate_input("wif,bonk").error == MULTIPLE_TOKENS_ERROR


def test_validate_empty():
    assert validate_input("").error == EMPTY_INPUT_ERROR
    assert validate_input("   ").error == EMPTY_INPUT_ERROR
    assert validate_input(None).error == EMPTY_INPUT_ERROR


def test_validate_ticker():
    result = validate_input("WIF")
    assert result.valid and result.type == "ticker"
    # Too short for an address, so it is just an odd ticker
    assert validate_input("0x123").type == "ticker"


def test_address_shapes():
    assert not is_contract_address("0x" + "g" * 40)
    assert not is_contract_address(EVM_ADDRESS + "\n")
    # Base58 has no 0, O, I or l
    assert not is_solana_address("0OIl" * 10)
    assert not is_solana_address("1" * 45)


def test_format_currency():
    assert format_currency(2_500_000_000) == "$2.50B"
    assert format_currency(1_500_000) == "$1.50M"
    assert format_currency(1_234) == "$1.23K"
    assert format_currency(5.5) == "$5.50"
    assert format_currency(0.005) == "$0.00500000"
    assert format_currency(None) == "N/A"


def test_format_price():
    assert format_price(1.5) == "$1.50"
    assert format_price(0.05) == "$0.0500"
    assert format_price(0.00123) == "$0.001230"
    assert format_price(0.0000001234) == "$0.0{6}1234"
    assert format_price(0) == "$0.00"
    assert format_price(None) == "N/A"


def test_format_percentage_and_number():
    assert format_percentage(5) == "+5.00%"
    assert format_percentage(-3.456) == "-3.46%"
    assert format_percentage(0) == "+0.00%"
    assert format_number(1_500) == "1.50K"
    assert format_number(2_000_000) == "2.00M"
    assert format_number(999) == "999"
    assert format_number(None) == "N/A"


def test_truncate_address():
    assert truncate_address(SOL_ADDRESS) == "EKpQGS...65zcjm"
    assert truncate_address(SOL_ADDRESS, chars=4) == "EKpQ...zcjm"
    assert truncate_address("abc") == "abc"
    assert truncate_address(None) == "N/A"
