"""Daily log, profile, weight and sync endpoints.

Every route requires a bearer token issued for the user in the path.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from nutritalk.api.dependencies import get_container, require_session
from nutritalk.containers import AppContainer
from nutritalk.domain.payloads import (
    DailyLogPayload,
    FoodEntryPayload,
    ProfilePayload,
    ProfileUpdatePayload,
    StepsPayload,
    SyncPayload,
    WaterPayload,
    WeightPayload,
    WeightUpdatePayload,
)
from nutritalk.services.interchange import export_daily_log, parse_myfitnesspal_csv

router = APIRouter(dependencies=[Depends(require_session)], tags=["tracker"])


@router.get("/logs/{user_id}/{day}")
async def get_log(
    user_id: UUID, day: date, container: AppContainer = Depends(get_container)
) -> DailyLogPayload:
    """Return the log for a date, empty when none was saved."""
    return DailyLogPayload.from_domain(container.log_service.get_log(user_id, day))


@router.post("/logs/{user_id}/{day}")
async def save_log(
    user_id: UUID,
    day: date,
    payload: DailyLogPayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogPayload:
    """Replace the log for a date."""
    if payload.day != day:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Log date does not match the URL",
        )
    saved = container.log_service.save_log(user_id, payload.to_domain())
    return DailyLogPayload.from_domain(saved)


@router.post("/logs/{user_id}/{day}/entries")
async def add_entries(
    user_id: UUID,
    day: date,
    entries: list[FoodEntryPayload],
    container: AppContainer = Depends(get_container),
) -> DailyLogPayload:
    """Append accepted suggestions or manual entries to a log."""
    log = container.log_service.add_entries(
        user_id, day, [entry.to_domain() for entry in entries]
    )
    return DailyLogPayload.from_domain(log)


@router.delete("/logs/{user_id}/{day}/entries/{entry_id}")
async def remove_entry(
    user_id: UUID,
    day: date,
    entry_id: str,
    container: AppContainer = Depends(get_container),
) -> DailyLogPayload:
    """Remove an entry from a log."""
    log = container.log_service.remove_entry(user_id, day, entry_id)
    return DailyLogPayload.from_domain(log)


@router.post("/logs/{user_id}/{day}/water")
async def add_water(
    user_id: UUID,
    day: date,
    payload: WaterPayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogPayload:
    """Add water to a log."""
    log = container.log_service.add_water(user_id, day, payload.amount)
    return DailyLogPayload.from_domain(log)


@router.put("/logs/{user_id}/{day}/steps")
async def set_steps(
    user_id: UUID,
    day: date,
    payload: StepsPayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogPayload:
    """Set the step count for a log."""
    log = container.log_service.set_steps(user_id, day, payload.steps)
    return DailyLogPayload.from_domain(log)


@router.put("/logs/{user_id}/{day}/weight")
async def set_weight(
    user_id: UUID,
    day: date,
    payload: WeightUpdatePayload,
    container: AppContainer = Depends(get_container),
) -> DailyLogPayload:
    """Set the weight for a log and record it in the history."""
    log = container.log_service.set_weight(user_id, day, payload.weight)
    return DailyLogPayload.from_domain(log)


@router.get("/logs/{user_id}/{day}/export")
async def export_log(
    user_id: UUID, day: date, container: AppContainer = Depends(get_container)
) -> Response:
    """Download a log as CSV."""
    content = export_daily_log(container.log_service.get_log(user_id, day))
    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="nutritalk-{day}.csv"'
        },
    )


@router.post("/logs/{user_id}/{day}/import")
async def import_log(
    user_id: UUID,
    day: date,
    request: Request,
    container: AppContainer = Depends(get_container),
) -> DailyLogPayload:
    """Import a MyFitnessPal CSV export into a log."""
    try:
        content = (await request.body()).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="CSV must be UTF-8"
        ) from exc
    entries = parse_myfitnesspal_csv(content)
    log = container.log_service.add_entries(user_id, day, entries)
    return DailyLogPayload.from_domain(log)


@router.get("/profile/{user_id}")
async def get_profile(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> ProfilePayload:
    """Return the profile with its daily targets."""
    return ProfilePayload.from_domain(container.profile_service.get_profile(user_id))


@router.put("/profile/{user_id}")
async def update_profile(
    user_id: UUID,
    payload: ProfileUpdatePayload,
    container: AppContainer = Depends(get_container),
) -> ProfilePayload:
    """Update profile fields; targets follow body metric changes."""
    profile = container.profile_service.update_profile(user_id, payload.to_changes())
    return ProfilePayload.from_domain(profile)


@router.get("/weights/{user_id}")
async def get_weights(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> list[WeightPayload]:
    """Return the weight history sorted by date."""
    history = container.weight_service.get_history(user_id)
    return [WeightPayload.from_domain(entry) for entry in history]


@router.post("/weights/{user_id}")
async def save_weights(
    user_id: UUID,
    payload: list[WeightPayload],
    container: AppContainer = Depends(get_container),
) -> list[WeightPayload]:
    """Replace the weight history."""
    history = container.weight_service.save_history(
        user_id, [entry.to_domain() for entry in payload]
    )
    return [WeightPayload.from_domain(entry) for entry in history]


@router.get("/sync/{user_id}")
async def sync(
    user_id: UUID, container: AppContainer = Depends(get_container)
) -> SyncPayload:
    """Return everything stored for the user."""
    return SyncPayload.from_domain(container.sync_service.snapshot(user_id))
