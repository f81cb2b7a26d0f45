from __future__ import annotations


class WorkflowError(Exception):
    """Domain failure with a stable machine-readable code."""

    status_code = 400

    def __init__(self, code: str, **context):
        super().__init__(code)
        self.code = code
        self.context = context


class InvalidRequest(WorkflowError):
    status_code = 400


class NotFoundError(WorkflowError):
    status_code = 404


class ConflictError(WorkflowError):
    status_code = 409
