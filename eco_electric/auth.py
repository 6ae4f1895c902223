import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from eco_electric.database import get_db
from eco_electric.errors import IdentityMismatch, InvalidOrExpiredToken, MissingCredential, NotAdmin
from eco_electric.repository import is_admin
from eco_electric.tokens import Identity, InvalidTokenError, TokenService, get_token_service

logger = logging.getLogger(__name__)


def extract_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def verify_token(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    token = extract_bearer(authorization)
    if token is None:
        raise MissingCredential()
    try:
        return tokens.verify(token)
    except InvalidTokenError as e:
        logger.warning("Rejected token: %s", e)
        raise InvalidOrExpiredToken()


def require_owner_match(identity: Identity, claimed_email: str) -> bool:
    if identity.email != claimed_email:
        logger.warning("Identity %s tried to act as %s", identity.email, claimed_email)
        raise IdentityMismatch()
    return True


def check_admin(db: Session, identity: Identity) -> bool:
    if not is_admin(db, identity.email):
        logger.warning("Non-admin %s denied", identity.email)
        raise NotAdmin()
    return True


def require_admin(
    identity: Identity = Depends(verify_token),
    db: Session = Depends(get_db),
) -> Identity:
    check_admin(db, identity)
    return identity
