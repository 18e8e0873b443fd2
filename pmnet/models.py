"""Core data models for the Project Network service"""
from typing import List, Optional, Dict, Any, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Enums
class ErrorCode(str, Enum):
    AP_FILE_NOT_FOUND = "AP_FILE_NOT_FOUND"
    AP_VALIDATION_ERROR = "AP_VALIDATION_ERROR"
    AP_NODE_ID_MISSING = "AP_NODE_ID_MISSING"
    AP_DUPLICATE_NODE_ID = "AP_DUPLICATE_NODE_ID"
    AP_INVALID_START_DATE = "AP_INVALID_START_DATE"
    AP_INVALID_END_DATE = "AP_INVALID_END_DATE"
    AP_EMPTY = "AP_EMPTY"

    AM_FILE_NOT_FOUND = "AM_FILE_NOT_FOUND"
    AM_INVALID_CELL_VALUE = "AM_INVALID_CELL_VALUE"
    AM_EMPTY = "AM_EMPTY"

    PM_FILES_MISSING = "PM_FILES_MISSING"
    PM_NO_ACTIVITIES = "PM_NO_ACTIVITIES"
    PM_NO_ADJ_ROWS = "PM_NO_ADJ_ROWS"
    PM_VALIDATION_ERROR = "PM_VALIDATION_ERROR"

    # Non-fatal notes attached to a successful combined graph
    PM_NON_NUMERIC_NODE_ID = "PM_NON_NUMERIC_NODE_ID"
    PM_NODE_IDS_NOT_CONTIGUOUS = "PM_NODE_IDS_NOT_CONTIGUOUS"

# Models
class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ValidationIssue(WireModel):
    code: ErrorCode
    message: str
    meta: Optional[Dict[str, Any]] = None

    def to_wire(self) -> Dict[str, Any]:
        # meta is omitted entirely when absent
        wire: Dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.meta is not None:
            wire["meta"] = dict(self.meta)
        return wire


class Activity(WireModel):
    node_id: str = Field(alias="nodeId")
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")


class Link(WireModel):
    from_: Activity = Field(alias="from")
    to: Activity
    gap_days: int = Field(alias="gapDays")


class ActivityReport(WireModel):
    valid: bool = True
    errors: List[str] = Field(default_factory=list)
    data: List[Activity]


class AdjacencyReport(WireModel):
    valid: bool = True
    errors: List[str] = Field(default_factory=list)
    matrix: List[List[Union[int, float]]]


class CombinedGraph(WireModel):
    links: List[Link]
    diag: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)

    @field_serializer("diag", "warnings")
    def serialize_issues(self, issues: List[ValidationIssue]) -> List[Dict[str, Any]]:
        return [issue.to_wire() for issue in issues]


class ErrorReport(BaseModel):
    status: str = "error"
    code: ErrorCode
    message: str
    details: List[Dict[str, Any]] = Field(default_factory=list)

# Configuration
class DataSettings(BaseModel):
    directory: str = "annexes"
    activity_file: str = "activity-properties.csv"
    adjacency_file: str = "adjacency-matrix.csv"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)


class CorsSettings(BaseModel):
    allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:4200"])
    allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    allow_headers: List[str] = Field(default_factory=lambda: ["Content-Type", "Authorization"])
    allow_credentials: bool = False


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_output: bool = Field(default=False, alias="json")

    model_config = ConfigDict(populate_by_name=True)


class NetworkConstants(BaseModel):
    data: DataSettings = Field(default_factory=DataSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
