# tests/test_auth.py
import pytest

from utils.auth import HashedPasswordPolicy, PlainPasswordPolicy, get_password_policy


@pytest.fixture(scope="module")
def hashed():
    return HashedPasswordPolicy()


@pytest.fixture(scope="module")
def stored_hash(hashed):
    return hashed.hash("abc123")


def test_hash_is_bcrypt_with_cost_of_at_least_ten(stored_hash):
    assert stored_hash.startswith("$2b$")
    assert int(stored_hash.split("$")[2]) >= 10
    assert stored_hash != "abc123"


def test_correct_password_verifies(hashed, stored_hash):
    assert hashed.verify("abc123", stored_hash) is True


@pytest.mark.parametrize("attempt", ["abc124", "ABC123", "", "abc123 ", 123])
def test_other_passwords_fail(hashed, stored_hash, attempt):
    assert hashed.verify(attempt, stored_hash) is False


@pytest.mark.parametrize("stored", ["abc123", "", None, 1234])
def test_hashed_policy_never_raises_on_non_hash(hashed, stored):
    assert hashed.verify("abc123", stored) is False


def test_numeric_password_is_hashed_as_text(hashed):
    stored = hashed.hash(1234)
    assert hashed.verify("1234", stored) is True


def test_plain_policy_coerces_before_comparing():
    plain = PlainPasswordPolicy()
    assert plain.verify("1234", 1234) is True
    assert plain.verify(1234, "1234") is True
    assert plain.verify("1234", 1234.0) is True
    assert plain.verify("1234", "12345") is False
    assert plain.verify("1234", None) is False
    assert plain.hash(1234) == "1234"


def test_policy_lookup():
    assert isinstance(get_password_policy("plain"), PlainPasswordPolicy)
    assert isinstance(get_password_policy("hashed"), HashedPasswordPolicy)
    with pytest.raises(ValueError):
        get_password_policy("md5")
