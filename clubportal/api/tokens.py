# clubportal/api/tokens.py

import logging
import secrets
from datetime import timedelta
from functools import wraps

from flask import current_app, request, jsonify, g

from database import get_db_session
from clubportal.models import ApiToken
from clubportal.permissions import can
from clubportal.services import UserDirectory
from clubportal.session_store import SessionProfile
from clubportal.utils import utcnow

logger = logging.getLogger(__name__)


def new_token():
    return secrets.token_urlsafe(32)


def issue_token(uid):
    ttl = timedelta(hours=current_app.config.get('API_TOKEN_TTL_HOURS', 24))
    with get_db_session() as s:
        purged = s.query(ApiToken).filter(ApiToken.expires_at <= utcnow()).delete(synchronize_session=False)
        if purged:
            logger.info(f"Purged {purged} expired API token(s)")
        token = ApiToken(token=new_token(), uid=uid, expires_at=utcnow() + ttl)
        s.add(token)
        s.commit()
        value = token.token
    logger.info(f"Issued API token for {uid}")
    return value


def revoke_token(value):
    with get_db_session() as s:
        token = s.get(ApiToken, value)
        if token is not None:
            uid = token.uid
            s.delete(token)
            s.commit()
            logger.info(f"Revoked API token for {uid}")


def resolve_token(value):
    """Returns the SessionProfile behind a bearer token, or None."""
    if not value:
        return None
    with get_db_session() as s:
        token = s.get(ApiToken, value)
        if token is None:
            return None
        if token.is_expired():
            s.delete(token)
            s.commit()
            return None
        uid = token.uid
    record = UserDirectory().get_by_uid(uid)
    return SessionProfile.from_user(record) if record else None


def bearer_token():
    header = request.headers.get('Authorization', '')
    scheme, _, value = header.partition(' ')
    if scheme.lower() != 'bearer':
        return None
    return value.strip() or None


def error_response(message, status):
    return jsonify({"message": message}), status


def token_required(capability=None):
    """
    Decorator for JSON endpoints: 401 without a valid bearer token,
    403 when the token's role lacks ``capability``.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            profile = resolve_token(bearer_token())
            if profile is None:
                return error_response("Authentication required", 401)
            if capability is not None and not can(profile.role, capability):
                return error_response("You don't have permission to do that", 403)
            g.api_user = profile
            return f(*args, **kwargs)
        return decorated_function
    return decorator
