#!/usr/bin/env python3
"""
Chiffrement symétrique (Fernet) des jetons Spotify stockés en base.
Clé: ENCRYPTION_KEY (clé Fernet base64 32 octets), sinon dérivée de JWT_SECRET/SECRET_KEY.
"""
import os
import base64
import hashlib
from typing import Optional
from cryptography.fernet import Fernet, InvalidToken

_PREFIX = "enc:"
_fernet: Optional[Fernet] = None


def _get_fernet() -> Fernet:
    global _fernet
    if _fernet is not None:
        return _fernet
    key_env = (
        os.getenv("ENCRYPTION_KEY") or os.getenv("JWT_SECRET") or os.getenv("SECRET_KEY")
    )
    if not key_env:
        raise RuntimeError(
            "ENCRYPTION_KEY manquant. Définissez une clé Fernet (base64, 32 octets)."
        )
    if len(key_env) >= 43:  # longueur typique d'une clé Fernet
        try:
            _fernet = Fernet(key_env.encode("utf-8"))
            return _fernet
        except ValueError:
            pass
    # Dériver une clé Fernet depuis le secret fourni (SHA-256)
    digest = hashlib.sha256(key_env.encode("utf-8")).digest()
    _fernet = Fernet(base64.urlsafe_b64encode(digest))
    return _fernet


def is_encrypted(value: Optional[str]) -> bool:
    return bool(value) and value.startswith(_PREFIX)


def encrypt_str(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    token = _get_fernet().encrypt(value.encode("utf-8"))
    return _PREFIX + token.decode("utf-8")


def decrypt_str(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not value.startswith(_PREFIX):
        # Valeur legacy non chiffrée
        return value
    token = value[len(_PREFIX) :].encode("utf-8")
    try:
        return _get_fernet().decrypt(token).decode("utf-8")
    except InvalidToken:
        # Clé changée ou donnée corrompue: renvoyer brut pour éviter la perte
        return value
