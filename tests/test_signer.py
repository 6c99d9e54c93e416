import pytest

from krakenapi.errors import ConfigurationError
from krakenapi.signer import sign

# Sample private key from Kraken's REST authentication docs.
PRIVATE_KEY = "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="
NONCE = 1616492376594


def test_documented_add_order_vector():
    """Verify the signature published in Kraken's authentication docs."""
    body = "nonce=1616492376594&ordertype=limit&pair=XBTUSD&price=37500&type=buy&volume=1.25"
    signature = sign("/0/private/AddOrder", NONCE, body, PRIVATE_KEY)
    assert signature == "4/dpxb3iT4tp/ZCVEwSnEsLxx0bqyhLpdfOpc6fn7OR8+UClSV5n9E6aSS8MPtnRfp32bAb0nmbRn6H8ndwLUQ=="


def test_balance_vector_with_no_caller_params():
    """Pinned vector: Balance with empty params still signs the nonce field."""
    signature = sign("/0/private/Balance", NONCE, "nonce=1616492376594", PRIVATE_KEY)
    assert signature == "1nH4vwR+8FHiYh1QT649xXkGd3JR3x0DWkgv3u9Ed/Qqv6KPtgQpEU4m+Emb/VgpEji3j1XNwI+HCbfXxmrTOg=="


def test_empty_body_vector():
    signature = sign("/0/private/Balance", NONCE, "", PRIVATE_KEY)
    assert signature == "uKKtOLOo449RK9NGmj5rlaQSKlZhVM1/O5v6wsapSknOUhs0seiU5nNxT/otkfXcfvodrKaHbv5xdWwIlz5SBA=="


def test_sign_is_deterministic():
    first = sign("/0/private/Balance", NONCE, "nonce=1616492376594", PRIVATE_KEY)
    second = sign("/0/private/Balance", NONCE, "nonce=1616492376594", PRIVATE_KEY)
    assert first == second


def test_signature_depends_on_path():
    balance = sign("/0/private/Balance", NONCE, "nonce=1616492376594", PRIVATE_KEY)
    ledgers = sign("/0/private/Ledgers", NONCE, "nonce=1616492376594", PRIVATE_KEY)
    assert balance != ledgers


def test_invalid_base64_key_raises():
    """Verify a non-base64 secret is a configuration error, not a bad signature."""
    with pytest.raises(ConfigurationError, match="base64"):
        sign("/0/private/Balance", NONCE, "nonce=1", "not base64!")


def test_unencodable_path_raises():
    """Verify input that cannot be UTF-8 encoded is a configuration error."""
    with pytest.raises(ConfigurationError, match="encoding"):
        sign("/0/private/\ud800", 1, "", PRIVATE_KEY)
