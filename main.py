from __future__ import annotations

import logging
import os
from typing import AsyncIterator, Optional

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from assembler import AssembledPrompt, SelectionState, assemble
from catalog import catalog_payload
from config import (
    SUPPORTED_SERVICES,
    TEMPLATES_DIR,
    get_settings,
    resolve_service_key,
    service_key_name,
    update_env_file,
)
from llm_utils import LLMClient
from refinement import GeneratedResult
from session import Session, SessionBusyError

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="LensCraft")
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

_session = Session()


class GenerateRequest(BaseModel):
    selection: Optional[SelectionState] = None
    refine: bool = False


class AnalyzeResponse(BaseModel):
    subject: Optional[str]
    suggestions: dict[str, str]
    selection: SelectionState


def get_session() -> Session:
    return _session


async def get_llm_client() -> AsyncIterator[Optional[LLMClient]]:
    current = get_settings()
    api_key = resolve_service_key(current.service)
    if not api_key:
        yield None
        return
    async with LLMClient(
        current.service,
        api_key,
        fast_model=current.fast_model,
        pro_model=current.pro_model,
    ) as client:
        yield client


@app.get("/", response_class=HTMLResponse)
async def index(request: Request, session: Session = Depends(get_session)) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "catalog": catalog_payload(),
            "selection": session.selection.model_dump(),
            "history": session.history.list(),
            "service": get_settings().service,
        },
    )


@app.post("/settings")
async def update_settings(request: Request) -> JSONResponse:
    form = await request.form()
    service = (form.get("service") or "gemini").strip().lower()
    api_key = (form.get("api_key") or "").strip()
    if service not in SUPPORTED_SERVICES:
        raise HTTPException(status_code=400, detail=f"Unsupported service: {service}")

    updates = {service_key_name(service): api_key}
    update_env_file(updates)
    for key, value in updates.items():
        if value:
            os.environ[key] = value
    return JSONResponse({"status": "ok"})


@app.get("/api/catalog")
async def get_catalog() -> JSONResponse:
    return JSONResponse(catalog_payload())


@app.get("/api/selection", response_model=SelectionState)
async def get_selection(session: Session = Depends(get_session)) -> SelectionState:
    return session.selection


@app.put("/api/selection", response_model=SelectionState)
async def put_selection(
    selection: SelectionState,
    session: Session = Depends(get_session),
) -> SelectionState:
    return session.update_selection(selection)


@app.post("/api/assemble", response_model=AssembledPrompt)
async def assemble_preview(
    selection: Optional[SelectionState] = None,
    session: Session = Depends(get_session),
) -> AssembledPrompt:
    return assemble(selection or session.selection)


@app.post("/api/generate", response_model=GeneratedResult)
async def generate_prompt(
    payload: GenerateRequest,
    session: Session = Depends(get_session),
    client: Optional[LLMClient] = Depends(get_llm_client),
) -> GeneratedResult:
    if payload.refine and client is None:
        raise HTTPException(status_code=400, detail="Missing API key for selected service.")
    try:
        return await session.generate(
            client,
            refine_enabled=payload.refine,
            selection=payload.selection,
        )
    except SessionBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@app.post("/api/randomize", response_model=SelectionState)
async def randomize(session: Session = Depends(get_session)) -> SelectionState:
    return session.randomize()


@app.post("/api/analyze", response_model=AnalyzeResponse)
async def analyze_photo(
    image: UploadFile = File(...),
    session: Session = Depends(get_session),
    client: Optional[LLMClient] = Depends(get_llm_client),
) -> AnalyzeResponse:
    if not image or not image.filename:
        raise HTTPException(status_code=400, detail="Image is required.")
    if image.content_type and not image.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are supported.")
    if client is None:
        raise HTTPException(status_code=400, detail="Missing API key for selected service.")

    payload = await image.read()
    if not payload:
        raise HTTPException(status_code=400, detail="Uploaded image is empty.")

    try:
        result = await session.analyze_image(client, payload, image.content_type or "image/jpeg")
    except SessionBusyError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    return AnalyzeResponse(
        subject=result.subject,
        suggestions=result.suggestions,
        selection=session.selection,
    )


@app.get("/api/history")
async def list_history(session: Session = Depends(get_session)) -> JSONResponse:
    return JSONResponse({"history": session.history.list()})


@app.get("/api/history/{index}")
async def recall_history(index: int, session: Session = Depends(get_session)) -> JSONResponse:
    if index < 0 or index >= len(session.history):
        raise HTTPException(status_code=404, detail="No history entry at that position.")
    return JSONResponse({"prompt": session.history.recall(index)})


@app.delete("/api/history")
async def clear_history(session: Session = Depends(get_session)) -> JSONResponse:
    session.history.clear()
    return JSONResponse({"history": []})
