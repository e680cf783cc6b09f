"""Service layer for user accounts."""
import hashlib
import hmac
import logging
import secrets

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.bookmark_list import BookmarkList
from models.tag import Tag
from models.user import User, UserRole
from schemas.user import UserStats
from services.exceptions import UserAlreadyExistsError, UserNotFoundError

logger = logging.getLogger(__name__)


SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1


def _scrypt(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        password.encode(), salt=salt, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P, dklen=32,
    )


def hash_password(password: str) -> str:
    """
    Hash a password for storage as `scrypt$<salt hex>$<hash hex>`.

    Every call draws a fresh salt, so equal passwords never share a hash.
    Sign-in itself is handled outside this service.
    """
    salt = secrets.token_bytes(16)
    return f"scrypt${salt.hex()}${_scrypt(password, salt).hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Check a password against a value produced by hash_password."""
    try:
        algorithm, salt_hex, hash_hex = stored.split("$")
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    if algorithm != "scrypt":
        return False
    return hmac.compare_digest(_scrypt(password, salt), expected)


async def create_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str | None = None,
    role: UserRole | None = None,
) -> User:
    """
    Create a user.

    The first user of an empty installation becomes an admin; everyone after
    that defaults to a regular user unless a role is given.

    Raises:
        UserAlreadyExistsError: If the email is already registered.
    """
    email = email.strip().lower()
    existing = await get_user_by_email(db, email)
    if existing is not None:
        raise UserAlreadyExistsError(email)

    if role is None:
        user_count = await db.scalar(select(func.count()).select_from(User))
        role = UserRole.ADMIN if user_count == 0 else UserRole.USER

    user = User(
        name=name,
        email=email,
        password=hash_password(password) if password is not None else None,
        role=role,
    )
    try:
        async with db.begin_nested():
            db.add(user)
    except IntegrityError as e:
        # Another request registered the email between check and flush
        raise UserAlreadyExistsError(email) from e

    logger.info("Created user %s with role %s", user.id, role)
    return user


async def get_user(db: AsyncSession, user_id: str) -> User | None:
    """Get a user by ID."""
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by email (case-insensitive)."""
    result = await db.execute(
        select(User).where(User.email == email.strip().lower()),
    )
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession) -> list[User]:
    """Get all users, oldest first."""
    result = await db.execute(select(User).order_by(User.created_at, User.id))
    return list(result.scalars().all())


async def update_user_role(db: AsyncSession, user_id: str, role: UserRole) -> User:
    """
    Change a user's role.

    Raises:
        UserNotFoundError: If the user doesn't exist.
    """
    user = await get_user(db, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    user.role = role
    await db.flush()
    return user


async def delete_user(db: AsyncSession, user_id: str) -> bool:
    """
    Delete a user and, through database cascades, everything they own.

    Returns True if deleted, False if not found.
    """
    user = await get_user(db, user_id)
    if user is None:
        return False

    await db.delete(user)
    await db.flush()
    logger.info("Deleted user %s", user_id)
    return True


async def get_user_stats(db: AsyncSession, user_id: str) -> UserStats:
    """Count the bookmarks, favourites, archived bookmarks, tags and lists of a user."""
    bookmark_counts = (
        await db.execute(
            select(
                func.count(Bookmark.id),
                func.count(Bookmark.id).filter(Bookmark.favourited.is_(True)),
                func.count(Bookmark.id).filter(Bookmark.archived.is_(True)),
            ).where(Bookmark.user_id == user_id),
        )
    ).one()
    num_tags = await db.scalar(
        select(func.count()).select_from(Tag).where(Tag.user_id == user_id),
    )
    num_lists = await db.scalar(
        select(func.count()).select_from(BookmarkList).where(BookmarkList.user_id == user_id),
    )
    return UserStats(
        num_bookmarks=bookmark_counts[0],
        num_favourites=bookmark_counts[1],
        num_archived=bookmark_counts[2],
        num_tags=num_tags or 0,
        num_lists=num_lists or 0,
    )
