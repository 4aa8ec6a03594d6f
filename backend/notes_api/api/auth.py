from __future__ import annotations

import logging
import re
from typing import Any

from fastapi import APIRouter, Body, Depends

from notes_api import messages
from notes_api.api.deps import get_password_hasher, get_token_signer, get_users_store
from notes_api.errors import ConflictError, ForbiddenError, InternalError, ValidationError
from notes_api.models.auth import Credentials, TokenResponse
from notes_api.storage.base import UserStore
from notes_api.storage.users_store import UsernameTakenError
from notes_api.utils.auth_hash import PasswordHasher
from notes_api.utils.jwt_auth import TokenSigner

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

PASSWORD_MIN_LENGTH = 4
USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = re.compile(r"[a-z]+")


def read_credentials(body: Any) -> Credentials:
    """Absent fields, and bodies that are not JSON objects, read as null."""
    if not isinstance(body, dict):
        return Credentials()
    return Credentials.model_validate(body)


def validate_credentials(username: Any, password: Any) -> None:
    """Run the signup/signin input checks in order; the first failure wins."""
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(messages.PASSWORD_TOO_SHORT)
    if not isinstance(username, str) or not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationError(messages.USERNAME_LENGTH)
    if USERNAME_PATTERN.fullmatch(username) is None:
        raise ValidationError(messages.USERNAME_CHARSET)


@router.post("/signup", response_model=TokenResponse)
def signup(
    body: Any = Body(default=None),
    users: UserStore = Depends(get_users_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> TokenResponse:
    req = read_credentials(body)
    validate_credentials(req.username, req.password)

    if users.find_by_username(req.username) is not None:
        raise ConflictError(messages.USERNAME_TAKEN)

    try:
        hpw = hasher.hash(req.password)
    except Exception as exc:
        raise InternalError(str(exc)) from exc

    try:
        user = users.create(req.username, hpw)
    except UsernameTakenError:
        raise ConflictError(messages.USERNAME_TAKEN) from None

    logger.info("Created user %s (%s)", user.id, user.username)
    return TokenResponse(token=signer.issue(user.id))


@router.post("/signin", response_model=TokenResponse)
def signin(
    body: Any = Body(default=None),
    users: UserStore = Depends(get_users_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> TokenResponse:
    req = read_credentials(body)
    validate_credentials(req.username, req.password)

    # unknown user and wrong password share one message
    user = users.find_by_username(req.username)
    if user is None or not hasher.verify(req.password, user.hashed_password):
        logger.warning("Rejected signin for %s", req.username)
        raise ForbiddenError(messages.UNKNOWN_IDENTIFIER)

    return TokenResponse(token=signer.issue(user.id))
