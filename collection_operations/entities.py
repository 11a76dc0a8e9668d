"""
Collection operation entities.

Defines the result type returned by collection operations and the states a
create request moves through.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from hybrid_ops_exceptions import HybridOpsError, StatusCode


class Status(BaseModel):
    """
    Outcome of an operation: a status code and a message.

    Attributes:
        code: The result category.
        message: Human-readable detail; empty on success.
    """
    model_config = ConfigDict(frozen=True)

    code: StatusCode = Field(StatusCode.SUCCESS, description="The result category.")
    message: str = Field("", description="Human-readable detail.")

    @property
    def ok(self) -> bool:
        return self.code == StatusCode.SUCCESS

    @classmethod
    def success(cls) -> "Status":
        return cls()

    @classmethod
    def error(cls, code: StatusCode, message: str) -> "Status":
        return cls(code=code, message=message)

    @classmethod
    def from_exception(cls, exc: Exception) -> "Status":
        """
        Converts an exception into a status.

        Package exceptions keep their own status code; anything else is
        reported as UNEXPECTED_ERROR with the exception's message.
        """
        if isinstance(exc, HybridOpsError):
            return cls(code=exc.status_code, message=exc.message)
        return cls(code=StatusCode.UNEXPECTED_ERROR, message=str(exc))


class RequestState(str, Enum):
    """
    States of a create-collection request.

    The request moves forward only; every FAILED_* state and SUCCEEDED are
    terminal.
    """
    START = "start"
    NAME_VALIDATED = "name_validated"
    SCHEMA_BUILT = "schema_built"
    TYPES_RESOLVED = "types_resolved"
    SUBMITTED = "submitted"
    SUCCEEDED = "succeeded"
    FAILED_VALIDATION = "failed_validation"
    FAILED_BUILD = "failed_build"
    FAILED_TYPE_RESOLUTION = "failed_type_resolution"
    FAILED_SUBMISSION = "failed_submission"

    @property
    def is_terminal(self) -> bool:
        return self == RequestState.SUCCEEDED or self.value.startswith("failed_")
