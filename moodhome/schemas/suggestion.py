from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional
from moodhome.db.models import CompletionStatus, Priority, SuggestionStatus, SuggestionType

TYPE_ALIASES = {
    "SMART_ENVIRONMENT": SuggestionType.SMART_HOME,
    "SMART_HOME_ENVIRONMENT": SuggestionType.SMART_HOME,
}


class ActionData(BaseModel):
    type: str = "REMINDER"
    target_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("target_id", "targetId"))
    parameters: dict[str, str] = Field(default_factory=dict)
    display_text: str = Field(default="Take action", validation_alias=AliasChoices("display_text", "displayText"))
    is_completed: bool = Field(default=False, validation_alias=AliasChoices("is_completed", "isCompleted"))

    @field_validator("parameters", mode="before")
    @classmethod
    def _stringify(cls, v: Any):
        if not isinstance(v, dict):
            return {}
        return {str(k): str(val) for k, val in v.items() if val is not None}


class SuggestionDraft(BaseModel):
    """A suggestion as produced by the generator or templates, before it gets an id."""

    title: str
    description: str = ""
    type: SuggestionType = SuggestionType.WELLNESS
    priority: str = Priority.MEDIUM.value
    actions: list[ActionData] = Field(default_factory=list)
    reasoning: str = "AI-generated suggestion"
    estimated_duration: str = Field(default="5-10 minutes", validation_alias=AliasChoices("estimated_duration", "duration"))

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any):
        tag = str(v or "").strip().upper()
        if tag in TYPE_ALIASES:
            return TYPE_ALIASES[tag]
        try:
            return SuggestionType(tag)
        except ValueError:
            return SuggestionType.WELLNESS

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, v: Any):
        tag = str(v or "").strip().upper()
        return tag if tag in Priority.__members__ else Priority.MEDIUM.value

    @field_validator("title")
    @classmethod
    def _title(cls, v: str):
        return v.strip()


class SuggestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    check_in_id: str
    title: str
    description: str
    type: SuggestionType
    priority: str
    actions: list[ActionData]
    reasoning: str
    estimated_duration: str
    created_at: int
    status: SuggestionStatus
    is_executed: bool
    is_dismissed: bool
    executed_at: Optional[int] = None


class ActiveSuggestionsOut(BaseModel):
    suggestions: list[SuggestionOut]
    headline_priority: Optional[str] = None
    total_active: int
    version: int


class GenerateOut(BaseModel):
    check_in_id: str
    source: str  # "generator" | "templates"
    suggestions: list[SuggestionOut]


class ExecuteIn(BaseModel):
    completion_status: CompletionStatus = CompletionStatus.COMPLETED
    action_type: Optional[str] = None
    was_helpful: Optional[bool] = None
    user_feedback: Optional[str] = None


class ExecutionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    suggestion_id: str
    check_in_id: str
    executed_at: int
    action_type: Optional[str] = None
    was_helpful: Optional[bool] = None
    user_feedback: Optional[str] = None
    completion_status: CompletionStatus


class TransitionOut(BaseModel):
    suggestion: SuggestionOut
    changed: bool
    execution: Optional[ExecutionOut] = None
