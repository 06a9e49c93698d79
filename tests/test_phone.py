# tests/test_phone.py
from storage.base import AnyOf
from utils.phone import PhoneNumber, normalize_match


def test_numeric_string_candidates():
    phone = PhoneNumber("0811111111")
    assert phone.text == "0811111111"
    assert phone.candidates() == ["0811111111", 811111111, "811111111"]


def test_number_candidates():
    phone = PhoneNumber(811111111)
    assert phone.text == "811111111"
    assert phone.candidates() == ["811111111", 811111111]


def test_float_from_loose_json_is_treated_as_integer():
    assert PhoneNumber(811111111.0).text == "811111111"


def test_non_numeric_phone_keeps_text_only():
    phone = PhoneNumber(" +66 81-111-1111 ")
    assert phone.text == "+66 81-111-1111"
    assert not phone.is_numeric
    assert phone.number is None
    assert phone.candidates() == ["+66 81-111-1111"]


def test_string_and_number_forms_are_equal():
    assert PhoneNumber("0811111111") == PhoneNumber(811111111)
    assert PhoneNumber("0811111111") == 811111111
    assert PhoneNumber("0811111111") != PhoneNumber("0822222222")
    assert len({PhoneNumber("0811111111"), PhoneNumber(811111111)}) == 1


def test_normalize_match_builds_any_of_predicate():
    assert normalize_match("0811111111") == {"phone": AnyOf(["0811111111", 811111111, "811111111"])}
    assert normalize_match(PhoneNumber(123), field="contact") == {"contact": AnyOf(["123", 123])}


def test_key_drops_leading_zeros_and_separators():
    assert PhoneNumber("0811111111").key == "811111111"
    assert PhoneNumber(811111111).key == "811111111"
    assert PhoneNumber("081-111-1111").key == "811111111"
    assert PhoneNumber("0822222222").key != PhoneNumber("0811111111").key
    assert PhoneNumber("n/a").key == "n/a"
