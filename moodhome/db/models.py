import enum
import uuid
from typing import Any, Optional

from sqlalchemy import JSON, BigInteger, Enum, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    return str(uuid.uuid4())


class SuggestionType(str, enum.Enum):
    SMART_HOME = "SMART_HOME"
    SOCIAL_SUPPORT = "SOCIAL_SUPPORT"
    WELLNESS = "WELLNESS"
    THERAPEUTIC = "THERAPEUTIC"
    EMERGENCY = "EMERGENCY"


class Priority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class SuggestionStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    DISMISSED = "DISMISSED"
    EXECUTED = "EXECUTED"


class CompletionStatus(str, enum.Enum):
    COMPLETED = "COMPLETED"
    PARTIALLY_COMPLETED = "PARTIALLY_COMPLETED"
    CANCELLED = "CANCELLED"


suggestion_type_enum = Enum(SuggestionType, name="suggestion_type", native_enum=False, length=32)
suggestion_status_enum = Enum(SuggestionStatus, name="suggestion_status", native_enum=False, length=16)
completion_status_enum = Enum(CompletionStatus, name="completion_status", native_enum=False, length=32)


class Base(DeclarativeBase):
    pass


class CheckIn(Base):
    __tablename__ = "check_ins"
    __table_args__ = (Index("ix_check_ins_created_at", "created_at"),)
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    emotions: Mapped[list[Any]] = mapped_column(JSON, default=list)
    note: Mapped[Optional[str]] = mapped_column(Text)
    timestamp: Mapped[str] = mapped_column(String(64))
    created_at: Mapped[int] = mapped_column(BigInteger)


class AutomationSuggestion(Base):
    __tablename__ = "automation_suggestions"
    __table_args__ = (
        Index("ix_automation_suggestions_status", "status"),
        Index("ix_automation_suggestions_check_in_id", "check_in_id"),
    )
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    # no FK: suggestions outlive the check-in that produced them
    check_in_id: Mapped[str] = mapped_column(String(36))
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    type: Mapped[SuggestionType] = mapped_column(suggestion_type_enum, default=SuggestionType.WELLNESS)
    priority: Mapped[str] = mapped_column(String(16), default=Priority.MEDIUM.value)
    actions: Mapped[list[Any]] = mapped_column(JSON, default=list)
    reasoning: Mapped[str] = mapped_column(Text, default="")
    estimated_duration: Mapped[str] = mapped_column(String(64), default="")
    created_at: Mapped[int] = mapped_column(BigInteger)
    status: Mapped[SuggestionStatus] = mapped_column(suggestion_status_enum, default=SuggestionStatus.ACTIVE)
    executed_at: Mapped[Optional[int]] = mapped_column(BigInteger)

    @property
    def is_active(self) -> bool:
        return self.status == SuggestionStatus.ACTIVE

    @property
    def is_executed(self) -> bool:
        return self.status == SuggestionStatus.EXECUTED

    @property
    def is_dismissed(self) -> bool:
        return self.status == SuggestionStatus.DISMISSED


class Contact(Base):
    __tablename__ = "contacts"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200))
    phone_number: Mapped[str] = mapped_column(String(64))
    relationship: Mapped[str] = mapped_column(String(32))
    is_frequent: Mapped[bool] = mapped_column(default=False)
    last_contacted_at: Mapped[Optional[int]] = mapped_column(BigInteger)
    added_at: Mapped[int] = mapped_column(BigInteger)


class AutomationExecution(Base):
    __tablename__ = "automation_executions"
    __table_args__ = (Index("ix_automation_executions_suggestion_id", "suggestion_id"),)
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    suggestion_id: Mapped[str] = mapped_column(String(36))
    check_in_id: Mapped[str] = mapped_column(String(36))
    executed_at: Mapped[int] = mapped_column(BigInteger)
    action_type: Mapped[Optional[str]] = mapped_column(String(64))
    was_helpful: Mapped[Optional[bool]]
    user_feedback: Mapped[Optional[str]] = mapped_column(Text)
    completion_status: Mapped[CompletionStatus] = mapped_column(completion_status_enum)
