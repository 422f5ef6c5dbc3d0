"""Profile, target and meal endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from fastapi.encoders import jsonable_encoder

from aura_tracker.api.models import (
    MacroTargetsIn,
    MealIn,
    ProfileCreateRequest,
    RecalculateTargetsRequest,
    TargetsPreviewRequest,
)
from aura_tracker.containers import AppContainer
from aura_tracker.domain.profiles import Profile
from aura_tracker.services.progression import level_progress
from aura_tracker.services.targets import (
    calculate_bmr,
    calculate_tdee,
    compute_macro_targets,
    micro_targets,
)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _get_api_token(request: Request) -> str:
    return _container(request).settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include the service API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(dependencies=[Depends(require_api_token)])


@router.post("/targets/preview")
async def preview_targets(payload: TargetsPreviewRequest) -> dict[str, object]:
    """Compute daily targets without creating a profile."""
    metrics = payload.to_domain()
    bmr = calculate_bmr(metrics.weight_kg, metrics.height_cm, metrics.age)
    return jsonable_encoder(
        {
            "bmr": bmr,
            "tdee": calculate_tdee(bmr),
            "macros": compute_macro_targets(metrics, payload.goal),
            "micros": micro_targets(),
        }
    )


@router.post("/profiles/{user_id}", status_code=status.HTTP_201_CREATED)
async def create_profile(
    user_id: UUID, payload: ProfileCreateRequest, request: Request
) -> dict[str, object]:
    """Onboard a user with computed targets."""
    profile = _container(request).profile_service.create_profile(
        user_id=user_id,
        display_name=payload.display_name,
        metrics=payload.to_domain(),
        goal=payload.goal,
    )
    return _serialize_profile(profile)


@router.get("/profiles/{user_id}")
async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
    """Return a profile with its level progress."""
    profile = _container(request).profile_service.get_profile(user_id)
    return _serialize_profile(profile)


@router.post("/profiles/{user_id}/targets/recalculate")
async def recalculate_targets(
    user_id: UUID, payload: RecalculateTargetsRequest, request: Request
) -> dict[str, object]:
    """Recompute macro targets from metrics."""
    profile = _container(request).profile_service.recalculate_targets(
        user_id, weight_kg=payload.weight_kg, goal=payload.goal
    )
    return _serialize_profile(profile)


@router.put("/profiles/{user_id}/targets")
async def update_targets(
    user_id: UUID, payload: MacroTargetsIn, request: Request
) -> dict[str, object]:
    """Store user-edited macro targets."""
    profile = _container(request).profile_service.update_targets(
        user_id, payload.to_domain()
    )
    return _serialize_profile(profile)


@router.post("/profiles/{user_id}/meals/preview")
async def preview_meal(
    user_id: UUID, payload: MealIn, request: Request
) -> dict[str, object]:
    """Score a meal without saving it."""
    preview = _container(request).meal_log_service.preview_meal(
        user_id, payload.to_domain()
    )
    return jsonable_encoder(preview)


@router.post("/profiles/{user_id}/meals", status_code=status.HTTP_201_CREATED)
async def log_meal(
    user_id: UUID, payload: MealIn, request: Request
) -> dict[str, object]:
    """Score and store a meal, updating profile stats."""
    outcome = _container(request).meal_log_service.log_meal(
        user_id, payload.to_domain()
    )
    return jsonable_encoder(outcome)


@router.get("/profiles/{user_id}/meals")
async def meal_history(
    user_id: UUID,
    request: Request,
    limit: int | None = Query(default=None, ge=1, le=100),
) -> dict[str, object]:
    """Return the most recent meals."""
    container = _container(request)
    resolved_limit = limit or container.settings.recent_meals_limit
    meals = container.stats_service.get_history(user_id, resolved_limit)
    return jsonable_encoder({"meals": meals})


@router.get("/profiles/{user_id}/summaries")
async def daily_summaries(
    user_id: UUID,
    request: Request,
    days: int = Query(default=7, ge=1, le=90),
    end: date | None = None,
) -> dict[str, object]:
    """Return one summary per day ending today (or ``end``)."""
    container = _container(request)
    profile = container.profile_service.get_profile(user_id)
    end_day = end or container.meal_log_service.today()
    summaries = container.stats_service.get_period(
        user_id, end_day, days, profile.targets.protein_target_g
    )
    return jsonable_encoder({"summaries": summaries})


@router.post("/profiles/{user_id}/summaries/{day}/refresh")
async def refresh_summary(
    user_id: UUID, day: date, request: Request
) -> dict[str, object]:
    """Recompute and store one day's summary from its meal logs.

    Only today's summary takes the current HP; past days keep their snapshot.
    """
    container = _container(request)
    profile = container.profile_service.get_profile(user_id)
    is_today = day == container.meal_log_service.today()
    summary = container.stats_service.refresh_daily_summary(
        user_id,
        day,
        profile.targets.protein_target_g,
        hp_end_of_day=profile.stats.current_hp if is_today else None,
    )
    return jsonable_encoder(summary)


def _serialize_profile(profile: Profile) -> dict[str, object]:
    return jsonable_encoder(
        {
            "profile": profile,
            "progress": level_progress(profile.stats.total_xp),
        }
    )
