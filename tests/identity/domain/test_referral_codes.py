import pytest
from identity.referral.codes import REFERRAL_CODE_ALPHABET, generate_referral_code


def test_default_code_is_eight_characters():
    code = generate_referral_code()
    assert len(code) == 8
    assert set(code) <= set(REFERRAL_CODE_ALPHABET)


def test_length_from_environment(monkeypatch):
    monkeypatch.setenv("REFERRAL_CODE_LENGTH", "12")
    assert len(generate_referral_code()) == 12


def test_explicit_length():
    assert len(generate_referral_code(4)) == 4


def test_zero_length_rejected():
    with pytest.raises(ValueError):
        generate_referral_code(0)


def test_codes_vary():
    assert len({generate_referral_code() for _ in range(50)}) > 1
