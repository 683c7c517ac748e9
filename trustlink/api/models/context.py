"""Request context carried through a request's lifetime."""

from pydantic import BaseModel, Field


class RequestContext(BaseModel):
    """Identifiers bound to logs for one request."""

    request_id: str = Field(..., description="Generated or forwarded request id")
    trace_id: str = Field(default="", description="OpenTelemetry trace id when present")
    uid: str | None = Field(default=None, description="Authenticated caller")
