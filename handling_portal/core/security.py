from jose import jwt

from handling_portal.core.config import settings

# Access tokens are minted by the managed identity backend; we only verify them.
ALGO = "HS256"


def decode_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.BACKEND_JWT_SECRET,
        algorithms=[ALGO],
        audience=settings.BACKEND_JWT_AUDIENCE,
    )
