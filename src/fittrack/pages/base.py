"""Shared form state for the logging pages."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generator, Optional

from fittrack.api.response import UNKNOWN_ERROR, ApiResponse, ErrorKind


class ValidationError(ValueError):
    """User input rejected before any request is made."""


class SubmitInProgress(RuntimeError):
    """A submit was attempted while the previous one is still running."""


@dataclass(frozen=True)
class FormMessage:
    """Inline feedback shown under a form."""

    kind: str  # "success" or "error"
    text: str

    @classmethod
    def success(cls, text: str) -> "FormMessage":
        return cls("success", text)

    @classmethod
    def error(cls, text: str) -> "FormMessage":
        return cls("error", text)

    @property
    def is_error(self) -> bool:
        return self.kind == "error"


class FormPage:
    """Base for pages that submit a single form.

    ``loading`` is an advisory submit lock: it blocks a second submit from
    the same page while one is in flight, nothing more.
    """

    success_text = ""
    failure_text = ""

    def __init__(self) -> None:
        self.loading = False
        self.message: Optional[FormMessage] = None
        self.last_response: Optional[ApiResponse] = None

    def validate(self) -> None:
        """Raise ValidationError if the form cannot be submitted."""

    @contextmanager
    def _submitting(self) -> Generator[None, None, None]:
        if self.loading:
            raise SubmitInProgress("A submission is already in progress")
        self.loading = True
        self.message = None
        try:
            yield
        finally:
            self.loading = False

    def _check(self) -> bool:
        try:
            self.validate()
        except ValidationError as e:
            self.message = FormMessage.error(str(e))
            return False
        return True

    def _finish(self, response: ApiResponse) -> FormMessage:
        self.last_response = response
        if response.success:
            self.message = FormMessage.success(self.success_text)
            self.on_success()
        else:
            self.message = FormMessage.error(self._error_text(response))
        return self.message

    def on_success(self) -> None:
        """Update form state after a successful submit."""

    def _error_text(self, response: ApiResponse) -> str:
        error = response.error
        # Backend reported failure without saying why
        if error is None or (
            error.kind is ErrorKind.LOGICAL and error.message == UNKNOWN_ERROR
        ):
            return self.failure_text
        return error.message
