from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from .security import decode_token
from ..errors import AuthError


# Absence d'en-tête tolérée ici: l'erreur est levée en AuthError (401 homogène)
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_payload(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    if not creds or not creds.credentials:
        raise AuthError("En-tête Authorization manquant")
    try:
        return decode_token(creds.credentials)
    except JWTError:
        raise AuthError("Jeton invalide")


def get_current_user_id(payload: dict = Depends(get_current_payload)) -> str:
    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub:
        raise AuthError("Jeton invalide")
    return sub
