import jwt
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from flask import current_app

JWT_ALGORITHM = 'HS256'


@dataclass(frozen=True)
class Principal:
    user_id: int
    username: str
    tenant_id: int
    role: str = None


def generate_access_token(user):
    """Issue a signed access token carrying the user's tenant"""
    now = datetime.now(timezone.utc)
    hours = current_app.config.get('ACCESS_TOKEN_EXPIRATION_HOURS', 24)
    payload = {
        'user_id': user.id,
        'username': user.username,
        'tenant_id': user.tenant_id,
        'role': user.role.slug if user.role else None,
        'token_type': 'access',
        'exp': now + timedelta(hours=hours),
        'iat': now,
        'jti': secrets.token_hex(16),
    }
    return jwt.encode(payload, current_app.config['JWT_SECRET_KEY'], algorithm=JWT_ALGORITHM)


def decode_access_token(token):
    """Decode and validate access token"""
    try:
        payload = jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
    if payload.get('token_type') != 'access' or 'user_id' not in payload:
        return None
    return payload


def get_token_from_header(request):
    """Extract token from Authorization header"""
    auth_header = request.headers.get('Authorization')
    if auth_header and auth_header.startswith('Bearer '):
        return auth_header.split(' ', 1)[1].strip() or None
    return None


def get_principal(request):
    token = get_token_from_header(request)
    if not token:
        return None
    payload = decode_access_token(token)
    if not payload:
        return None
    return Principal(
        user_id=payload['user_id'],
        username=payload.get('username'),
        tenant_id=payload.get('tenant_id'),
        role=payload.get('role'),
    )
