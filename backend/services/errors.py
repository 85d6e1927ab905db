"""Error kinds raised by the clip pipeline core.

Each error carries the HTTP status class it maps to so the route layer can
translate it without a lookup table of its own.
"""

from __future__ import annotations

from typing import Any


class PipelineError(Exception):
    status_code = 400
    code = "BadRequest"

    def details(self) -> dict[str, Any] | None:
        return None


class InvalidFormat(PipelineError, ValueError):
    code = "InvalidFormat"


class InvalidDuration(PipelineError, ValueError):
    code = "InvalidDuration"


class EmptySegmentList(PipelineError, ValueError):
    code = "EmptySegmentList"


class InvalidSegment(PipelineError, ValueError):
    code = "InvalidSegment"


class InvalidManifest(PipelineError, ValueError):
    code = "InvalidManifest"


class InvalidStatus(PipelineError, ValueError):
    code = "ValidationError"


class InvalidStatusHistory(PipelineError, ValueError):
    code = "InvalidStatusHistory"


class MissingParameters(PipelineError):
    code = "MissingParameters"

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required parameters: {', '.join(self.missing)}")

    def details(self) -> dict[str, Any]:
        return {"missing": self.missing}


class MissingEpisodeId(PipelineError):
    code = "MissingEpisodeId"

    def __init__(self, message: str = "Episode ID is required") -> None:
        super().__init__(message)


class Unauthenticated(PipelineError):
    status_code = 401
    code = "Unauthorized"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class PrerequisiteNotMet(PipelineError):
    status_code = 409
    code = "PrerequisiteNotMet"

    def __init__(self, message: str, reasons: list[str]) -> None:
        self.reasons = list(reasons)
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {"missingPrerequisites": self.reasons}
