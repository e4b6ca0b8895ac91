from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator


ProjectType = Literal["success", "failure"]
PROJECT_TYPES = ("success", "failure")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def validate_project_fields(
    *,
    name: str,
    description: str,
    learnings: str,
    project_type: str,
    fix_plan: Optional[str],
) -> None:
    if project_type not in PROJECT_TYPES:
        raise ValueError(f'type must be one of: "success", "failure" (got "{project_type}").')
    for field, value in (("name", name), ("description", description), ("learnings", learnings)):
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{field} must be a non-empty string.")
    if project_type == "failure":
        if not isinstance(fix_plan, str) or not fix_plan.strip():
            raise ValueError("fixPlan must be a non-empty string for failure projects.")
    elif fix_plan is not None:
        raise ValueError("fixPlan is only allowed on failure projects.")


@dataclass(frozen=True)
class ProjectRecord:
    id: str
    name: str
    description: str
    learnings: str
    type: str
    created_at: datetime
    fix_plan: Optional[str] = None

    def __post_init__(self) -> None:
        validate_project_fields(
            name=self.name,
            description=self.description,
            learnings=self.learnings,
            project_type=self.type,
            fix_plan=self.fix_plan,
        )


class ProjectDraft(BaseModel):
    """A submitted project before the store assigns its id and timestamp.

    A success draft drops any fixPlan it was sent; a failure draft must carry one.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    learnings: str
    type: ProjectType
    fix_plan: Optional[str] = Field(default=None, alias="fixPlan")

    @model_validator(mode="after")
    def _check_required_fields(self) -> "ProjectDraft":
        if self.type == "success":
            self.fix_plan = None
        validate_project_fields(
            name=self.name,
            description=self.description,
            learnings=self.learnings,
            project_type=self.type,
            fix_plan=self.fix_plan,
        )
        return self


class GeneratedResult(BaseModel):
    model_config = ConfigDict(json_schema_extra={"additionalProperties": False})

    pitch: StrictStr = Field(description="The generated interview script.")
    key_strengths: List[StrictStr] = Field(
        alias="keyStrengths",
        description="List of key strengths identified.",
    )

    @field_validator("pitch")
    @classmethod
    def _pitch_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("pitch must be a non-empty string.")
        return value


# Declared to the provider as the structured output format.
PITCH_RESPONSE_SCHEMA = GeneratedResult.model_json_schema(by_alias=True)


class ProjectResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    learnings: str
    type: ProjectType
    fix_plan: Optional[str] = Field(default=None, alias="fixPlan")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_record(cls, record: ProjectRecord) -> "ProjectResponse":
        return cls(
            id=record.id,
            name=record.name,
            description=record.description,
            learnings=record.learnings,
            type=record.type,
            fix_plan=record.fix_plan,
            created_at=record.created_at,
        )


class ProjectListResponse(BaseModel):
    projects: List[ProjectResponse]
    counts: Dict[str, int]


class PitchStateResponse(BaseModel):
    result: Optional[GeneratedResult]
    error: Optional[str]
    generating: bool


class GeneratePitchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result: GeneratedResult
    # False when the projects changed while the provider was working.
    is_current: bool = Field(alias="isCurrent")
