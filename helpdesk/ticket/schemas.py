# helpdesk/ticket/schemas.py
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TicketBase(BaseModel):
    title: str
    description: str = ""
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    assignee: str = ""


class TicketInput(TicketBase):
    """Fields a client may set when creating or editing a ticket."""

    title: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="ignore")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value


class Ticket(TicketBase):
    id: str
    created_at: str = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TicketStats(BaseModel):
    total: int = 0
    open: int = 0
    in_progress: int = 0
    closed: int = 0
