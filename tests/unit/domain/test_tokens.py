import re

from careshare.domain.tokens import (
    generate_invite_token,
    generate_otp_code,
    generate_partnership_token,
    generate_reset_token,
    generate_share_token,
    group,
)


def test_invite_token_format():
    token = generate_invite_token()
    assert re.fullmatch(r"[A-Z0-9]{4}(-[A-Z0-9]{4}){3}", token)


def test_partnership_token_format():
    token = generate_partnership_token()
    assert re.fullmatch(r"[A-Z0-9]{5}(-[A-Z0-9]{5}){3}", token)


def test_share_token_format():
    token = generate_share_token()
    assert re.fullmatch(r"PAT-[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}", token)


def test_reset_token_is_32_mixed_case_characters():
    token = generate_reset_token()
    assert re.fullmatch(r"[A-Za-z0-9]{32}", token)


def test_otp_code_is_six_digits_without_leading_zero():
    for _ in range(200):
        code = generate_otp_code()
        assert re.fullmatch(r"[1-9][0-9]{5}", code)


def test_tokens_do_not_repeat():
    tokens = {generate_invite_token() for _ in range(500)}
    assert len(tokens) == 500


def test_group_splits_into_blocks():
    assert group("ABCDEFGH", 4) == "ABCD-EFGH"
    assert group("ABCDEFGHIJ", 5, separator=" ") == "ABCDE FGHIJ"
