"""Custom tagging prompt endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.prompt import PromptCreate, PromptResponse, PromptUpdate
from services import prompt_service

router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.post("/", response_model=PromptResponse, status_code=201)
async def create_prompt(
    data: PromptCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> PromptResponse:
    """Create a custom prompt used when tagging bookmarks."""
    prompt = await prompt_service.create_prompt(db, current_user.id, data)
    return PromptResponse.model_validate(prompt)


@router.get("/", response_model=list[PromptResponse])
async def get_prompts(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[PromptResponse]:
    """Get all custom prompts for the current user."""
    prompts = await prompt_service.get_prompts(db, current_user.id)
    return [PromptResponse.model_validate(prompt) for prompt in prompts]


@router.patch("/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: str,
    data: PromptUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> PromptResponse:
    """Update a custom prompt."""
    prompt = await prompt_service.update_prompt(db, current_user.id, prompt_id, data)
    if prompt is None:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return PromptResponse.model_validate(prompt)


@router.delete("/{prompt_id}", status_code=204)
async def delete_prompt(
    prompt_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a custom prompt."""
    deleted = await prompt_service.delete_prompt(db, current_user.id, prompt_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Prompt not found")
