"""
PKCE (RFC 7636): code_verifier aléatoire et code_challenge S256.
"""

import base64
import hashlib
import secrets
import string

# Caractères non réservés autorisés pour le verifier
UNRESERVED_CHARS = string.ascii_letters + string.digits + "-._~"
VERIFIER_MIN_LEN = 43
VERIFIER_MAX_LEN = 128


def generate_code_verifier(length: int = 64) -> str:
    if not VERIFIER_MIN_LEN <= length <= VERIFIER_MAX_LEN:
        raise ValueError(
            f"Longueur du verifier hors bornes ({VERIFIER_MIN_LEN}-{VERIFIER_MAX_LEN})"
        )
    return "".join(secrets.choice(UNRESERVED_CHARS) for _ in range(length))


def code_challenge(verifier: str) -> str:
    # base64url sans padding du SHA-256
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def generate_pkce_pair(length: int = 64) -> tuple[str, str]:
    verifier = generate_code_verifier(length)
    return verifier, code_challenge(verifier)


def generate_state() -> str:
    return secrets.token_urlsafe(24)
