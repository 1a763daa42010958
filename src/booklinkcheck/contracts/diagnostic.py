"""Validation outcome and diagnostic contracts."""

from __future__ import annotations

from enum import StrEnum
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, Field

from booklinkcheck.contracts.config import WarningPolicy
from booklinkcheck.contracts.link import Link, Span


class Severity(StrEnum):
    WARNING = "warning"
    ERROR = "error"


class ErrorKind(StrEnum):
    MALFORMED_LINK = "MalformedLink"
    OUTSIDE_ROOT = "OutsideRoot"
    MISSING_FILE = "MissingFile"
    BROKEN_ANCHOR = "BrokenAnchor"
    NETWORK_FAILURE = "NetworkFailure"
    HTTP_ERROR = "HttpError"
    CONFIG_INTERPOLATION = "ConfigInterpolationError"


class LinkOutcome(BaseModel):
    """Result of checking one external URL: ``ok`` or broken with a reason."""

    ok: bool
    reason: str | None = None
    kind: ErrorKind | None = None
    status: int | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def success(cls) -> LinkOutcome:
        return cls(ok=True)

    @classmethod
    def http_error(cls, status: int, reason: str) -> LinkOutcome:
        return cls(ok=False, reason=reason, kind=ErrorKind.HTTP_ERROR, status=status)

    @classmethod
    def network_failure(cls, reason: str) -> LinkOutcome:
        return cls(ok=False, reason=reason, kind=ErrorKind.NETWORK_FAILURE)


class Diagnostic(BaseModel):
    severity: Severity
    kind: ErrorKind
    message: str
    source_file: PurePosixPath | None = None
    location: Span | None = None
    link: Link | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def for_link(
        cls,
        link: Link,
        kind: ErrorKind,
        message: str,
        *,
        severity: Severity = Severity.WARNING,
    ) -> Diagnostic:
        return cls(
            severity=severity,
            kind=kind,
            message=message,
            source_file=link.source_file,
            location=link.span,
            link=link,
        )

    def sort_key(self) -> tuple[str, int, int]:
        if self.location is None:
            return ("" if self.source_file is None else str(self.source_file), 0, 0)
        return (str(self.source_file), self.location.line, self.location.column)

    def __str__(self) -> str:
        if self.location is None:
            where = "" if self.source_file is None else f"{self.source_file}: "
        else:
            where = f"{self.source_file}:{self.location.line}:{self.location.column}: "
        return f"{self.severity}: {where}{self.message}"


class LinkcheckReport(BaseModel):
    success: bool
    policy: WarningPolicy
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    links_checked: int = 0

    @property
    def emitted(self) -> list[Diagnostic]:
        if self.policy is WarningPolicy.IGNORE:
            return []
        return self.diagnostics
