"""Error taxonomy for the Project Network service"""
from typing import List, Optional, Dict, Any

from pmnet.models import ErrorCode, ErrorReport, ValidationIssue


def push(details: List[ValidationIssue], code: ErrorCode, message: str,
         meta: Optional[Dict[str, Any]] = None) -> None:
    """Append one collected issue; parsing never stops on it"""
    details.append(ValidationIssue(code=code, message=message, meta=meta))


class PmNetError(Exception):
    """A not-found, empty, validation or structural failure.

    Carries the HTTP status the boundary should answer with, a stable code,
    a human readable message and the itemized issues behind it.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 422,
        details: Optional[List[ValidationIssue]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = list(details or [])

    def to_report(self) -> ErrorReport:
        return ErrorReport(
            code=self.code,
            message=self.message,
            details=[d.to_wire() for d in self.details],
        )

    def __repr__(self) -> str:
        return f"PmNetError({self.code.value}, status={self.status_code}, details={len(self.details)})"


class SourceNotFound(PmNetError):
    def __init__(self, code: ErrorCode, filename: str):
        super().__init__(code, f"{filename} not found", status_code=404)
        self.filename = filename
