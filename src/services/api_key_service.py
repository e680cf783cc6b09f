"""Service layer for API key operations."""
import hashlib
import hmac
import logging
import secrets

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.api_key import ApiKey
from models.user import User
from services.exceptions import ApiKeyAlreadyExistsError

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "ak1"


def hash_secret(secret: str) -> str:
    """Hash the secret half of a key for comparison against stored hashes."""
    return hashlib.sha256(secret.encode()).hexdigest()


def generate_api_key() -> tuple[str, str, str]:
    """
    Generate a new API key.

    The plaintext has the form ``ak1_<key_id>_<secret>``. key_id is stored as-is
    for lookup; only the hash of the secret is stored.

    Returns:
        Tuple of (plaintext_key, key_id, key_hash).
        The plaintext should only be shown once at creation.
    """
    key_id = secrets.token_hex(10)
    secret = secrets.token_hex(32)
    plaintext = f"{API_KEY_PREFIX}_{key_id}_{secret}"
    return plaintext, key_id, hash_secret(secret)


def parse_api_key(plaintext: str) -> tuple[str, str] | None:
    """Split a plaintext key into (key_id, secret). Returns None if malformed."""
    parts = plaintext.split("_")
    if len(parts) != 3 or parts[0] != API_KEY_PREFIX or not parts[1] or not parts[2]:
        return None
    return parts[1], parts[2]


async def create_api_key(
    db: AsyncSession,
    user_id: str,
    name: str,
) -> tuple[ApiKey, str]:
    """
    Create a new API key for a user.

    Returns:
        Tuple of (ApiKey model, plaintext_key).
        The plaintext key is only available at creation time.

    Raises:
        ApiKeyAlreadyExistsError: If the user already has a key with this name.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    existing = await db.scalar(
        select(ApiKey.id).where(ApiKey.user_id == user_id, ApiKey.name == name),
    )
    if existing is not None:
        raise ApiKeyAlreadyExistsError(name)

    plaintext, key_id, key_hash = generate_api_key()
    api_key = ApiKey(user_id=user_id, name=name, key_id=key_id, key_hash=key_hash)
    try:
        async with db.begin_nested():
            db.add(api_key)
    except IntegrityError as e:
        raise ApiKeyAlreadyExistsError(name) from e
    await db.refresh(api_key)

    return api_key, plaintext


async def get_api_keys(db: AsyncSession, user_id: str) -> list[ApiKey]:
    """Get all API keys for a user, newest first (without secrets)."""
    result = await db.execute(
        select(ApiKey)
        .where(ApiKey.user_id == user_id)
        .order_by(ApiKey.created_at.desc(), ApiKey.id.desc()),
    )
    return list(result.scalars().all())


async def revoke_api_key(db: AsyncSession, user_id: str, api_key_id: str) -> bool:
    """
    Delete (revoke) an API key.

    Returns:
        True if deleted, False if not found.
    """
    result = await db.execute(
        select(ApiKey).where(ApiKey.id == api_key_id, ApiKey.user_id == user_id),
    )
    api_key = result.scalar_one_or_none()
    if api_key is None:
        return False

    await db.delete(api_key)
    await db.flush()
    return True


async def authenticate_api_key(db: AsyncSession, plaintext: str) -> User | None:
    """
    Resolve a plaintext API key to its owner.

    Returns:
        The owning User, or None if the key is malformed, unknown or wrong.
    """
    parsed = parse_api_key(plaintext)
    if parsed is None:
        return None
    key_id, secret = parsed

    api_key = await db.scalar(select(ApiKey).where(ApiKey.key_id == key_id))
    if api_key is None:
        return None

    if not hmac.compare_digest(api_key.key_hash, hash_secret(secret)):
        logger.warning("API key %s presented with a wrong secret", key_id)
        return None

    return await db.get(User, api_key.user_id)
