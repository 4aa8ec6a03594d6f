from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Header
from jose import JWTError, jwt

from notes_api import messages
from notes_api.api.deps import get_token_signer, get_users_store
from notes_api.errors import AuthError
from notes_api.storage.base import UserStore
from notes_api.storage.users_store import UserRecord

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-access-token"


class TokenSigner:
    """Issues and checks the signed identity tokens handed out at signin.

    Tokens are HS256 JWTs carrying ``{"id": <user id>, "iat", "exp"}``.
    ``verify`` never raises: anything that does not decode with the shared
    secret, or has expired, yields ``None``.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(hours=24)):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, subject_id: str) -> str:
        now = datetime.now(timezone.utc)
        exp = now + self.expires_in
        payload = {"id": str(subject_id), "iat": int(now.timestamp()), "exp": int(exp.timestamp())}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[str]:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None
        subject = payload.get("id")
        if not subject:
            return None
        return str(subject)


def get_current_user(
    token: Optional[str] = Header(default=None, alias=TOKEN_HEADER),
    signer: TokenSigner = Depends(get_token_signer),
    users: UserStore = Depends(get_users_store),
) -> UserRecord:
    """Resolve the ``x-access-token`` header to the stored user.

    - no header -> 401 "Unauthorize user"
    - bad signature / expired / unknown user -> 401 "Utilisateur non connecté"
    """
    if not token:
        raise AuthError(messages.MISSING_TOKEN)

    user_id = signer.verify(token)
    if user_id is None:
        raise AuthError(messages.NOT_CONNECTED)

    user = users.find_by_id(user_id)
    if user is None:
        logger.warning("Token for unknown user id %s", user_id)
        raise AuthError(messages.NOT_CONNECTED)
    return user
