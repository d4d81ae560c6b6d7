"""Error record data models."""

from datetime import date
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, computed_field

from errata.models.severity import BuildSeverity, Severity


class LinkTarget(str, Enum):
    """Documentation page a record links to.

    Chosen by which identifying fields are present on the record.
    """

    DECLINE_CODE = "decline_code"
    ERROR_CODE = "error_code"
    API_ERRORS = "api_errors"
    ERROR_CODES_INDEX = "error_codes_index"


class SeedRecord(BaseModel):
    """Partially specified error record as curated in the seed set."""

    api: str
    resource: str
    method: Optional[str] = None
    error_type: str
    error_code: Optional[str] = None
    decline_code: Optional[str] = None
    http_status: Optional[int] = None
    error_message: Optional[str] = None
    solution_title: str = ""
    solution_description: str = ""
    reproduce_in_test_mode: Optional[str] = None
    params_implicated: List[str] = Field(default_factory=list)
    severity: Optional[Union[BuildSeverity, Severity]] = None

    @property
    def code(self) -> str:
        """Natural key: the fine-grained code, else the error type."""
        return self.error_code or self.error_type


class ErrorRecord(BaseModel):
    """Canonical normalized error pattern with its suggested fix."""

    id: Optional[str] = None
    api: str
    resource: str
    method: Optional[str] = None
    error_type: str
    error_code: Optional[str] = None
    decline_code: Optional[str] = None
    http_status: Optional[int] = None
    error_message: str = Field(..., min_length=1)
    solution_title: str = ""
    solution_description: str = ""
    reproduce_in_test_mode: Optional[str] = None
    params_implicated: List[str] = Field(default_factory=list)
    severity: Severity
    build_severity: Optional[BuildSeverity] = None
    source_url: str
    last_verified: date
    category: str
    frequency: str
    tags: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def code(self) -> str:
        """Natural key: the fine-grained code, else the error type."""
        return self.error_code or self.error_type
