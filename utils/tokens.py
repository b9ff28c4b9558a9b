"""
Bearer token helpers.

Tokens are HS256 JWTs carrying the user id in ``sub``. They are stateless:
logging out is the client forgetting its token, the server keeps no session
table to invalidate.
"""
from datetime import datetime, timezone

import jwt
from flask import current_app


def issue_token(user):
    """Return a signed bearer token for *user*."""
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user.id),
        'email': user.email,
        'iat': now,
        'exp': now + current_app.config['JWT_EXPIRES_IN'],
    }
    return jwt.encode(
        payload,
        current_app.config['JWT_SECRET_KEY'],
        algorithm=current_app.config.get('JWT_ALGORITHM', 'HS256'),
    )


def decode_token(token):
    """Decode and verify *token*.

    Raises ``jwt.PyJWTError`` for expired, tampered or malformed tokens.
    """
    return jwt.decode(
        token,
        current_app.config['JWT_SECRET_KEY'],
        algorithms=[current_app.config.get('JWT_ALGORITHM', 'HS256')],
        options={'require': ['sub', 'exp']},
    )


def bearer_token_from_header(header_value):
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not header_value:
        return None
    scheme, _, token = header_value.partition(' ')
    if scheme.lower() != 'bearer':
        return None
    token = token.strip()
    return token or None
