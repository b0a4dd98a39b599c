# chefsense/chefsense/api/routes.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from chefsense.api.schemas import (
    ChatRequest,
    ChatResponse,
    RecipeSummary,
    SessionRequest,
    SessionResponse,
    VoiceErrorRequest,
    VoiceErrorResponse,
)
from chefsense.application.voice import describe_voice_error

log = logging.getLogger("api.routes")
router = APIRouter()


# -------------------------
# Dependencies via app.state
# -------------------------
def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check app startup wiring.")
    return value


def get_dialogue_manager(request: Request):
    return _from_state(request, "dialogue_manager")


def get_browse_uc(request: Request):
    return _from_state(request, "browse_uc")


def get_recipe_detail_uc(request: Request):
    return _from_state(request, "recipe_detail_uc")


def get_similar_uc(request: Request):
    return _from_state(request, "similar_uc")


# -------------------------
# conversation
# -------------------------
@router.post("/session", response_model=SessionResponse)
def open_session(req: SessionRequest, dm=Depends(get_dialogue_manager)) -> Any:
    if not req.session_id.strip():
        raise HTTPException(status_code=400, detail="session_id is required")
    return dm.open_session(req.session_id)


@router.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, dm=Depends(get_dialogue_manager)) -> Any:
    if not req.session_id.strip():
        raise HTTPException(status_code=400, detail="session_id is required")
    if not req.text.strip():
        raise HTTPException(status_code=400, detail="text is required")

    try:
        out = await dm.handle(req.session_id, req.text, source=req.source)
        out.setdefault("session_id", req.session_id)
        return out
    except Exception as e:
        log.exception("Processing /chat error")
        raise HTTPException(status_code=500, detail=str(e))


# -------------------------
# recipes
# -------------------------
@router.get("/recipes", response_model=List[RecipeSummary])
def browse_recipes(
    q: str = "",
    country: Optional[str] = None,
    difficulty: Optional[str] = None,
    dietary: Optional[str] = None,
    time_range: Optional[str] = None,
    tag: Optional[str] = None,
    browse=Depends(get_browse_uc),
) -> Any:
    try:
        return browse(
            q, country=country, difficulty=difficulty, dietary=dietary, time_range=time_range, tag=tag
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/recipes/{slug}")
def recipe_detail(slug: str, detail=Depends(get_recipe_detail_uc)) -> Any:
    try:
        return detail(slug)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/recipes/{slug}/similar", response_model=List[RecipeSummary])
def similar_recipes(slug: str, limit: int = 3, similar=Depends(get_similar_uc)) -> Any:
    if limit < 1:
        raise HTTPException(status_code=400, detail="limit must be >= 1")
    try:
        return similar(slug, limit=limit)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


# -------------------------
# voice
# -------------------------
@router.post("/voice/error", response_model=VoiceErrorResponse)
def voice_error(req: VoiceErrorRequest) -> Any:
    message = describe_voice_error(req.code)
    log.info("Voice error code=%s", req.code)
    return {"code": req.code, "message": message}
