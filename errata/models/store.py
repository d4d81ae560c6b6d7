"""Data models exchanged with the remote error store."""

from typing import List, Optional

from pydantic import BaseModel, Field


class APIDefinition(BaseModel):
    """Registered API: node metadata plus documentation link table."""

    name: str
    base_url: str
    version: str
    docs_url: str
    default_resource: str = "any"
    error_codes_url: str
    decline_codes_url: Optional[str] = None
    api_errors_url: str
    status: str = "active"

    @property
    def active(self) -> bool:
        return self.status == "active"


class StoredErrorPattern(BaseModel):
    """Error pattern node as returned by the store."""

    id: str
    code: str
    message: Optional[str] = None
    description: Optional[str] = None
    resource: Optional[str] = None
    method: Optional[str] = None
    http_status: Optional[int] = None
    severity: Optional[str] = None


class StoredSolution(BaseModel):
    """Solution node linked to an error pattern."""

    id: str
    error_id: str
    title: str
    description: str
    code_example: Optional[str] = None
    source_url: Optional[str] = None
    upvotes: int = 0


class StoredParameter(BaseModel):
    """Parameter node linked to an error pattern."""

    id: str
    error_id: str
    name: str
    param_type: str = "string"
    required: bool = True
    description: Optional[str] = None
    example: Optional[str] = None


class ErrorSolutions(BaseModel):
    """Error pattern with its known solutions."""

    error: StoredErrorPattern
    solutions: List[StoredSolution] = Field(default_factory=list)


class IngestReport(BaseModel):
    """Outcome of ingesting one API's records into the store."""

    api: str
    api_id: Optional[str] = None
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    failed_codes: List[str] = Field(default_factory=list)

    @property
    def success_rate(self) -> float:
        if not self.total:
            return 0.0
        return self.succeeded / self.total * 100
