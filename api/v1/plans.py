# api/v1/plans.py
from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status

from api.v1.schemas import PlanData, PlanRequest, PreviewResponse
from core.planner import PlanAssembler
from services.gemini import GenerationError

_LOG = logging.getLogger(__name__)

router = APIRouter()

# what the client shows; it only ever sees "plan" or "try again"
_FAILURE_MESSAGE = {
    "en": "Failed to generate plan. Please check your network connection and try again.",
    "ar": "فشل في إنشاء الخطة. يرجى التحقق من الاتصال بالشبكة والمحاولة مرة أخرى.",
}


@lru_cache
def get_assembler() -> PlanAssembler:
    return PlanAssembler()


@router.post(
    "",
    response_model=PlanData,
    status_code=status.HTTP_200_OK,
    summary="Build a nutrition + exercise plan for a profile",
)
async def create_plan(
    body: PlanRequest,
    assembler: PlanAssembler = Depends(get_assembler),
) -> PlanData:
    try:
        return await assembler.build(body.profile, body.language)
    except GenerationError as exc:
        _LOG.error("plan generation failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=_FAILURE_MESSAGE[body.language],
        ) from exc


@router.post(
    "/preview",
    response_model=PreviewResponse,
    summary="Show the energy target and the strategy a profile routes to",
)
async def preview_plan(
    body: PlanRequest,
    assembler: PlanAssembler = Depends(get_assembler),
) -> PreviewResponse:
    pv = assembler.preview(body.profile)
    return PreviewResponse(energy_target=pv.energy_target, strategy=pv.strategy)
