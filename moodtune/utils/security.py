import os
from jose import jwt

JWT_SECRET = os.getenv("JWT_SECRET", os.getenv("SECRET_KEY", "change-me"))
JWT_ALG = os.getenv("JWT_ALG", "HS256")
# Audience attendue (ex: "authenticated" pour des JWT Supabase); vide = non vérifiée
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE") or None


def decode_token(token: str) -> dict:
    return jwt.decode(
        token,
        JWT_SECRET,
        algorithms=[JWT_ALG],
        audience=JWT_AUDIENCE,
        options={"verify_aud": bool(JWT_AUDIENCE)},
    )
