"""Supabase JWT gate for the dashboard routes that change or export shared state."""
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from .config import settings


auth_scheme = HTTPBearer(auto_error=True)


@dataclass(frozen=True)
class DashboardUser:
    user_id: str
    email: str | None = None

    def usage_fields(self) -> dict[str, Any]:
        return {"user_id": self.user_id, "user_email": self.email}


def verify_supabase_jwt(token: str) -> dict[str, Any]:
    if not settings.supabase_jwt_secret:
        raise HTTPException(status_code=500, detail="SUPABASE_JWT_SECRET not configured.")
    try:
        return jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=settings.supabase_jwt_audience,
            # Supabase projects behind a custom domain may not pin an issuer
            options={"verify_iss": bool(settings.supabase_issuer)},
            issuer=settings.supabase_issuer or None,
        )
    except JWTError as exc:
        raise HTTPException(status_code=401, detail=f"Invalid token: {exc}") from exc


def require_user(creds: HTTPAuthorizationCredentials = Depends(auth_scheme)) -> DashboardUser:
    claims = verify_supabase_jwt(creds.credentials)
    user_id = claims.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token: no subject")
    return DashboardUser(user_id=user_id, email=claims.get("email"))
