"""Content adaptation API endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..database import get_async_db
from ..logging_config import bind_user_context, get_logger
from ..schemas.adaptation import (
    AdaptedContent, AdaptRequest, ContentAdaptationParameters,
    ContentSimplificationOptions, EvaluateRequest, Recommendation,
    SimplifiedContent, SimplifyContentRequest, SimplifyRequest,
    SimplifyResponse, TransformRequest
)
from ..services.accessibility_service import AccessibilitySettingsService
from ..services.adaptation_engine import AdaptationEngine
from ..services.profile_service import ProfileService
from ..services.text_simplifier import ContentSimplifier, simplify

router = APIRouter(prefix="/adaptation", tags=["adaptation"])
logger = get_logger(__name__)


def get_adaptation_engine() -> AdaptationEngine:
    return AdaptationEngine()


def get_content_simplifier() -> ContentSimplifier:
    return ContentSimplifier()


@router.post("/evaluate", response_model=ContentAdaptationParameters)
async def evaluate(
    request: EvaluateRequest,
    engine: AdaptationEngine = Depends(get_adaptation_engine)
) -> ContentAdaptationParameters:
    """Derive adaptation parameters for a profile and its settings."""
    return engine.evaluate(request.profile, request.settings)


@router.post("/transform", response_model=AdaptedContent)
async def transform(
    request: TransformRequest,
    engine: AdaptationEngine = Depends(get_adaptation_engine)
) -> AdaptedContent:
    """Adapt content with caller-supplied parameters."""
    return engine.transform(request.content, request.parameters, request.profile)


@router.post(
    "/adapt/{user_id}",
    response_model=AdaptedContent,
    dependencies=[Depends(bind_user_context)],
)
async def adapt_for_user(
    user_id: str,
    request: AdaptRequest,
    db: AsyncSession = Depends(get_async_db),
    engine: AdaptationEngine = Depends(get_adaptation_engine)
) -> AdaptedContent:
    """Adapt content using a user's stored profile and settings."""
    profile = await ProfileService(db).get_profile(user_id)
    settings = await AccessibilitySettingsService(db).get_settings(user_id)
    logger.info("Adapting content for user", user_id=user_id, content_id=request.content.id)
    return engine.adapt(request.content, profile, settings)


@router.get(
    "/recommendations/{user_id}",
    response_model=List[Recommendation],
    dependencies=[Depends(bind_user_context)],
)
async def recommendations(
    user_id: str,
    db: AsyncSession = Depends(get_async_db),
    engine: AdaptationEngine = Depends(get_adaptation_engine)
) -> List[Recommendation]:
    """Suggest next steps from a user's performance history."""
    profile = await ProfileService(db).get_profile(user_id)
    return engine.recommend(profile)


@router.post("/simplify", response_model=SimplifyResponse)
async def simplify_text(request: SimplifyRequest) -> SimplifyResponse:
    """Simplify a piece of text."""
    return SimplifyResponse(original_text=request.text, simplified_text=simplify(request.text))


@router.post("/simplify-content", response_model=SimplifiedContent)
async def simplify_content(
    request: SimplifyContentRequest,
    simplifier: ContentSimplifier = Depends(get_content_simplifier)
) -> SimplifiedContent:
    """Simplify a passage and derive reading aids for it."""
    options = request.options
    if "target_age" not in options.model_fields_set:
        options = ContentSimplificationOptions(
            target_age=get_settings().default_target_age,
            disability_type=options.disability_type,
        )
    return simplifier.simplify_content(request.text, options)
