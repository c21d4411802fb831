# app/core/security.py
"""
Décodage des JWT d'accès. L'émission des tokens est hors du périmètre
de ce service (fournie par le service d'authentification).
"""
from typing import Any, Dict

from jose import jwt

from app.core.config import settings


def decode_token(token: str) -> Dict[str, Any]:
    """Lève jose.JWTError si le token est invalide ou expiré."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
