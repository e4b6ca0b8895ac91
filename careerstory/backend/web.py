import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from .errors import ConfigurationError, EmptyInputError, PitchGenerationError
from .llm_client import PitchProvider, load_llm_settings
from .models import (
    GeneratePitchResponse,
    PitchStateResponse,
    ProjectDraft,
    ProjectListResponse,
    ProjectResponse,
    ProjectType,
)
from .storage import InMemoryProjectStore
from .workspace import GenerationInProgressError, PitchWorkspace, user_message


logger = logging.getLogger("uvicorn.error")


def build_workspace() -> PitchWorkspace:
    provider = PitchProvider(load_llm_settings())
    if not provider.is_configured:
        logger.warning("pitch_provider_unconfigured reason=missing PITCH_LLM_API_KEY")
    return PitchWorkspace(InMemoryProjectStore(), provider)


app = FastAPI(title="CareerStory Pitch Backend")
workspace = build_workspace()

frontend_origins = os.getenv(
    "FRONTEND_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in frontend_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict:
    return {
        "status": "ok",
        "storage": workspace.store.storage_name,
        "provider_configured": workspace.provider.is_configured,
    }


@app.get("/api/projects", response_model=ProjectListResponse)
def list_projects(
    project_type: Optional[ProjectType] = Query(default=None, alias="type"),
) -> ProjectListResponse:
    records = workspace.store.list(project_type)
    return ProjectListResponse(
        projects=[ProjectResponse.from_record(record) for record in records],
        counts=workspace.store.counts(),
    )


@app.post("/api/projects", response_model=ProjectResponse, status_code=201)
def create_project(draft: ProjectDraft) -> ProjectResponse:
    record = workspace.store.add(draft)
    logger.info("project_id=%s project_added type=%s", record.id, record.type)
    return ProjectResponse.from_record(record)


@app.delete("/api/projects/{project_id}", status_code=204)
def delete_project(project_id: str) -> Response:
    workspace.store.remove(project_id)
    logger.info("project_id=%s project_deleted", project_id)
    return Response(status_code=204)


@app.get("/api/pitch", response_model=PitchStateResponse)
def get_pitch_state() -> PitchStateResponse:
    return PitchStateResponse(
        result=workspace.result,
        error=workspace.error,
        generating=workspace.generating,
    )


@app.post("/api/pitch", response_model=GeneratePitchResponse)
def generate_pitch_now() -> GeneratePitchResponse:
    try:
        outcome = workspace.generate()
    except GenerationInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except EmptyInputError as exc:
        raise HTTPException(status_code=400, detail=user_message(exc)) from exc
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=user_message(exc)) from exc
    except PitchGenerationError as exc:
        raise HTTPException(status_code=502, detail=user_message(exc)) from exc

    return GeneratePitchResponse(result=outcome.result, is_current=outcome.is_current)
