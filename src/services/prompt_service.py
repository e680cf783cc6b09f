"""Service layer for custom tagging prompts."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import BookmarkType
from models.custom_prompt import CustomPrompt, PromptScope
from schemas.prompt import PromptCreate, PromptUpdate


async def create_prompt(db: AsyncSession, user_id: str, data: PromptCreate) -> CustomPrompt:
    """Create a custom prompt."""
    prompt = CustomPrompt(
        user_id=user_id,
        text=data.text,
        applies_to=data.applies_to,
        enabled=data.enabled,
    )
    db.add(prompt)
    await db.flush()
    await db.refresh(prompt)
    return prompt


async def get_prompts(db: AsyncSession, user_id: str) -> list[CustomPrompt]:
    """Get all custom prompts for a user, ordered by creation date."""
    result = await db.execute(
        select(CustomPrompt)
        .where(CustomPrompt.user_id == user_id)
        .order_by(CustomPrompt.created_at, CustomPrompt.id),
    )
    return list(result.scalars().all())


async def get_prompt(db: AsyncSession, user_id: str, prompt_id: str) -> CustomPrompt | None:
    """Get a single custom prompt by ID, scoped to user."""
    result = await db.execute(
        select(CustomPrompt).where(
            CustomPrompt.id == prompt_id,
            CustomPrompt.user_id == user_id,
        ),
    )
    return result.scalar_one_or_none()


async def update_prompt(
    db: AsyncSession,
    user_id: str,
    prompt_id: str,
    data: PromptUpdate,
) -> CustomPrompt | None:
    """Update a custom prompt. Returns None if not found."""
    prompt = await get_prompt(db, user_id, prompt_id)
    if prompt is None:
        return None

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(prompt, field, value)

    await db.flush()
    await db.refresh(prompt)
    return prompt


async def delete_prompt(db: AsyncSession, user_id: str, prompt_id: str) -> bool:
    """Delete a custom prompt. Returns True if deleted, False if not found."""
    prompt = await get_prompt(db, user_id, prompt_id)
    if prompt is None:
        return False

    await db.delete(prompt)
    await db.flush()
    return True


async def get_enabled_prompts_for(
    db: AsyncSession,
    user_id: str,
    bookmark_type: BookmarkType,
) -> list[CustomPrompt]:
    """
    Get the enabled prompts that apply when tagging a bookmark of this type.

    "all" prompts always apply; "text" prompts apply to link and text
    bookmarks; "images" prompts apply to asset bookmarks.
    """
    if bookmark_type == BookmarkType.ASSET:
        scopes = [PromptScope.ALL, PromptScope.IMAGES]
    else:
        scopes = [PromptScope.ALL, PromptScope.TEXT]

    result = await db.execute(
        select(CustomPrompt)
        .where(
            CustomPrompt.user_id == user_id,
            CustomPrompt.enabled.is_(True),
            CustomPrompt.applies_to.in_(scopes),
        )
        .order_by(CustomPrompt.created_at, CustomPrompt.id),
    )
    return list(result.scalars().all())
