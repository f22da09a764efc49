from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class TicketRecord(BaseModel):
    """A ticket as returned by the API, plus the id it was requested under."""

    model_config = ConfigDict(extra="allow")

    ticket_id: str = Field(..., description="Id used in the request URL")
    status: str


class StatusCount(BaseModel):
    status: str
    count: int = Field(..., ge=0)


class QueueTask(BaseModel):
    ticket_id: str
    delay: float = Field(..., ge=0)  # seconds


class FetchFailure(str, Enum):
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    MALFORMED_RESPONSE = "malformed_response"


class FetchResult(BaseModel):
    ticket_id: str
    record: Optional[TicketRecord] = None
    failure: Optional[FetchFailure] = None
    status_code: Optional[int] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    @classmethod
    def success(cls, record: TicketRecord) -> "FetchResult":
        return cls(ticket_id=record.ticket_id, record=record)

    @classmethod
    def failed(
        cls,
        ticket_id: str,
        failure: FetchFailure,
        detail: str,
        status_code: Optional[int] = None,
    ) -> "FetchResult":
        return cls(
            ticket_id=ticket_id,
            failure=failure,
            detail=detail,
            status_code=status_code,
        )


class RunSummary(BaseModel):
    enqueued: int = 0
    fetched: int = 0
    failed: int = 0
    status_counts: Dict[str, int] = Field(default_factory=dict)
