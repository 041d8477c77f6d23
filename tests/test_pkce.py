import re

import pytest

from moodtune.utils.pkce import (
    code_challenge,
    generate_code_verifier,
    generate_pkce_pair,
    generate_state,
)


def test_verifier_uses_unreserved_charset():
    verifier = generate_code_verifier()
    assert len(verifier) == 64
    assert re.fullmatch(r"[A-Za-z0-9\-._~]+", verifier)


@pytest.mark.parametrize("length", [43, 128])
def test_verifier_length_bounds_accepted(length):
    assert len(generate_code_verifier(length)) == length


@pytest.mark.parametrize("length", [42, 129])
def test_verifier_length_out_of_bounds(length):
    with pytest.raises(ValueError):
        generate_code_verifier(length)


def test_challenge_matches_rfc7636_vector():
    verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
    assert code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


def test_pair_is_consistent_and_unpadded():
    verifier, challenge = generate_pkce_pair()
    assert challenge == code_challenge(verifier)
    assert "=" not in challenge


def test_verifiers_and_states_are_random():
    assert generate_code_verifier() != generate_code_verifier()
    assert generate_state() != generate_state()
