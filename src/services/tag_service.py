"""Service layer for tag operations."""
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.tag import BookmarkTag, Tag, TagAttribution
from schemas.tag import TagCount
from schemas.validators import validate_and_normalize_tag, validate_and_normalize_tags
from services.exceptions import BookmarkNotFoundError, TagAlreadyExistsError, TagNotFoundError

logger = logging.getLogger(__name__)


async def get_or_create_tags(
    db: AsyncSession,
    user_id: str,
    tag_names: list[str],
) -> list[Tag]:
    """
    Get existing tags or create new ones.

    Args:
        db: Database session.
        user_id: User ID to scope tags.
        tag_names: List of tag names to get or create.

    Returns:
        List of Tag objects (existing or newly created), in the order of the
        normalized names.
    """
    if not tag_names:
        return []

    normalized = validate_and_normalize_tags(tag_names)
    if not normalized:
        return []

    # Fetch existing tags
    result = await db.execute(
        select(Tag).where(
            Tag.user_id == user_id,
            Tag.name.in_(normalized),
        ),
    )
    existing_tags = {tag.name: tag for tag in result.scalars()}

    tags = []
    for name in normalized:
        tag = existing_tags.get(name)
        if tag is None:
            tag = Tag(user_id=user_id, name=name)
            try:
                async with db.begin_nested():
                    db.add(tag)
            except IntegrityError:
                # Created by a concurrent request between check and flush
                logger.info("Tag %r created concurrently for user %s", name, user_id)
                tag = (
                    await db.execute(
                        select(Tag).where(Tag.user_id == user_id, Tag.name == name),
                    )
                ).scalar_one()
        tags.append(tag)

    return tags


async def get_tag_by_name(
    db: AsyncSession,
    user_id: str,
    tag_name: str,
) -> Tag | None:
    """
    Get a tag by name for a user.

    Args:
        db: Database session.
        user_id: User ID to scope the tag.
        tag_name: Name of the tag to find.

    Returns:
        The Tag if found, None otherwise. A name that could never be stored
        (blank or too long) is simply not found.
    """
    try:
        normalized = validate_and_normalize_tag(tag_name)
    except ValueError:
        return None
    result = await db.execute(
        select(Tag).where(
            Tag.user_id == user_id,
            Tag.name == normalized,
        ),
    )
    return result.scalar_one_or_none()


async def get_user_tags_with_counts(
    db: AsyncSession,
    user_id: str,
) -> list[TagCount]:
    """
    Get all tags for a user with their usage counts.

    Counts are split by who attached the tag. Tags that are attached to no
    bookmark are included with zero counts.

    Returns:
        List of TagCount objects sorted by count desc, then name asc.
    """
    total = func.count(BookmarkTag.bookmark_id)
    result = await db.execute(
        select(
            Tag.id,
            Tag.name,
            total.label("count"),
            func.count(BookmarkTag.bookmark_id)
            .filter(BookmarkTag.attached_by == TagAttribution.AI)
            .label("ai_count"),
            func.count(BookmarkTag.bookmark_id)
            .filter(BookmarkTag.attached_by == TagAttribution.HUMAN)
            .label("human_count"),
        )
        .outerjoin(BookmarkTag, Tag.id == BookmarkTag.tag_id)
        .where(Tag.user_id == user_id)
        .group_by(Tag.id, Tag.name)
        .order_by(total.desc(), Tag.name.asc()),
    )
    return [
        TagCount(
            id=row.id,
            name=row.name,
            count=row.count,
            ai_count=row.ai_count,
            human_count=row.human_count,
        )
        for row in result
    ]


async def _get_owned_bookmark(db: AsyncSession, user_id: str, bookmark_id: str) -> Bookmark:
    bookmark = await db.scalar(
        select(Bookmark).where(Bookmark.id == bookmark_id, Bookmark.user_id == user_id),
    )
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return bookmark


async def attach_tags(
    db: AsyncSession,
    user_id: str,
    bookmark_id: str,
    tag_names: list[str],
    attached_by: TagAttribution = TagAttribution.HUMAN,
) -> list[Tag]:
    """
    Attach tags to a bookmark, creating missing tags.

    Tags that are already attached keep their original attribution and
    timestamp.

    Returns:
        The tags that were newly attached.

    Raises:
        BookmarkNotFoundError: If the bookmark doesn't exist or isn't the user's.
    """
    await _get_owned_bookmark(db, user_id, bookmark_id)
    tags = await get_or_create_tags(db, user_id, tag_names)
    if not tags:
        return []

    result = await db.execute(
        select(BookmarkTag.tag_id).where(
            BookmarkTag.bookmark_id == bookmark_id,
            BookmarkTag.tag_id.in_([tag.id for tag in tags]),
        ),
    )
    already_attached = set(result.scalars())

    attached = []
    for tag in tags:
        if tag.id in already_attached:
            continue
        db.add(BookmarkTag(bookmark_id=bookmark_id, tag_id=tag.id, attached_by=attached_by))
        attached.append(tag)

    await db.flush()
    return attached


async def detach_tags(
    db: AsyncSession,
    user_id: str,
    bookmark_id: str,
    tag_names: list[str],
) -> int:
    """
    Detach tags from a bookmark. Unknown or unattached tag names are ignored.

    The tags themselves are kept even if no bookmark uses them anymore.

    Returns:
        Number of tags detached.

    Raises:
        BookmarkNotFoundError: If the bookmark doesn't exist or isn't the user's.
    """
    await _get_owned_bookmark(db, user_id, bookmark_id)
    normalized = validate_and_normalize_tags(tag_names)
    if not normalized:
        return 0

    result = await db.execute(
        select(BookmarkTag)
        .join(Tag, Tag.id == BookmarkTag.tag_id)
        .where(
            BookmarkTag.bookmark_id == bookmark_id,
            Tag.user_id == user_id,
            Tag.name.in_(normalized),
        ),
    )
    links = list(result.scalars())
    for link in links:
        await db.delete(link)
    await db.flush()
    return len(links)


async def rename_tag(
    db: AsyncSession,
    user_id: str,
    old_name: str,
    new_name: str,
) -> Tag:
    """
    Rename a tag.

    Args:
        db: Database session.
        user_id: User ID to scope the tag.
        old_name: Current name of the tag.
        new_name: New name for the tag.

    Returns:
        The updated Tag object.

    Raises:
        TagNotFoundError: If the tag doesn't exist.
        TagAlreadyExistsError: If a tag with the new name already exists.
    """
    tag = await get_tag_by_name(db, user_id, old_name)
    if tag is None:
        raise TagNotFoundError(old_name)

    new_normalized = validate_and_normalize_tag(new_name)
    if tag.name == new_normalized:
        return tag

    existing = await get_tag_by_name(db, user_id, new_normalized)
    if existing is not None:
        raise TagAlreadyExistsError(new_normalized)

    try:
        async with db.begin_nested():
            tag.name = new_normalized
    except IntegrityError as e:
        # Another request created the name between check and flush
        raise TagAlreadyExistsError(new_normalized) from e
    await db.refresh(tag)
    return tag


async def delete_tag(
    db: AsyncSession,
    user_id: str,
    tag_name: str,
) -> None:
    """
    Delete a tag. Junction table entries cascade automatically.

    Raises:
        TagNotFoundError: If the tag doesn't exist.
    """
    tag = await get_tag_by_name(db, user_id, tag_name)
    if tag is None:
        raise TagNotFoundError(tag_name)

    await db.delete(tag)
    await db.flush()


async def merge_tags(
    db: AsyncSession,
    user_id: str,
    into_tag: str,
    from_tags: list[str],
) -> Tag:
    """
    Merge tags into a single target tag.

    Every bookmark carrying one of the source tags ends up carrying the target
    tag (keeping the attribution of the source attachment unless the target
    was already attached), then the source tags are deleted. The target tag is
    created if it doesn't exist yet. Naming the target among the sources is
    allowed and leaves it untouched.

    Raises:
        TagNotFoundError: If any source tag doesn't exist.
    """
    target_name = validate_and_normalize_tag(into_tag)
    source_names = [
        name for name in validate_and_normalize_tags(from_tags) if name != target_name
    ]

    result = await db.execute(
        select(Tag).where(Tag.user_id == user_id, Tag.name.in_(source_names)),
    )
    sources = list(result.scalars())
    found = {tag.name for tag in sources}
    for name in source_names:
        if name not in found:
            raise TagNotFoundError(name)

    [target] = await get_or_create_tags(db, user_id, [target_name])
    if not sources:
        return target

    source_ids = [tag.id for tag in sources]
    already_tagged = set(
        (
            await db.execute(
                select(BookmarkTag.bookmark_id).where(BookmarkTag.tag_id == target.id),
            )
        ).scalars(),
    )
    source_links = (
        await db.execute(
            select(BookmarkTag)
            .where(BookmarkTag.tag_id.in_(source_ids))
            .order_by(BookmarkTag.attached_at),
        )
    ).scalars().all()
    for link in source_links:
        if link.bookmark_id not in already_tagged:
            already_tagged.add(link.bookmark_id)
            db.add(
                BookmarkTag(
                    bookmark_id=link.bookmark_id,
                    tag_id=target.id,
                    attached_by=link.attached_by,
                    attached_at=link.attached_at,
                ),
            )
        await db.delete(link)

    for tag in sources:
        await db.delete(tag)
    await db.flush()

    logger.info(
        "Merged %d tags into '%s' for user %s", len(source_ids), target_name, user_id,
    )
    return target
