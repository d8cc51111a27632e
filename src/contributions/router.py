from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from src.contributions.schemas import Contribution
from src.contributions.service import ContributionService

router = APIRouter()


def get_contribution_service() -> ContributionService:
    return ContributionService()


def _form_text(form, key: str) -> str:
    value = form.get(key)
    return value.strip() if isinstance(value, str) else ""


def _form_image(form, key: str):
    value = form.get(key)
    if isinstance(value, UploadFile) and value.filename:
        return value.filename, value.file
    return None


def _numbered_fields(form, prefix: str):
    """Values of prefix1, prefix2, ... in numeric order; a bare prefix counts as 0"""
    numbered = []
    for key, value in form.multi_items():
        if not key.startswith(prefix):
            continue
        suffix = key[len(prefix):]
        if suffix and not suffix.isdigit():
            continue
        numbered.append((int(suffix or 0), value))
    numbered.sort(key=lambda item: item[0])
    return [value for _, value in numbered]


@router.post("/contributions")
async def handle_contribution(
    request: Request,
    service: ContributionService = Depends(get_contribution_service)
):
    """Accept a multipart route contribution and forward it to the admins"""
    form = await request.form()

    intermediate_stations = [
        value.strip()
        for value in _numbered_fields(form, "intermediateStation")
        if isinstance(value, str) and value.strip()
    ]
    intermediate_images = [
        (value.filename, value.file)
        for value in _numbered_fields(form, "intermediateStationImage")
        if isinstance(value, UploadFile) and value.filename
    ]

    contribution = Contribution(
        start_station=_form_text(form, "startStation"),
        end_station=_form_text(form, "endStation"),
        price=_form_text(form, "price"),
        notes=_form_text(form, "notes"),
        intermediate_stations=intermediate_stations,
        start_station_image=_form_image(form, "startStationImage"),
        end_station_image=_form_image(form, "endStationImage"),
        intermediate_station_images=intermediate_images
    )

    await run_in_threadpool(service.submit, contribution)
    return {"message": "Contribution received successfully"}
