from typing import Any, Optional


class TaskBoardError(Exception):
    """Base for errors that translate directly into an HTTP response.

    ``detail`` is sent back as the JSON body unchanged, so it is usually a
    plain message string.
    """

    status_code = 500

    def __init__(self, detail: Any, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class RequestValidationFailed(TaskBoardError):
    status_code = 400


class EntityNotFound(TaskBoardError):
    status_code = 404

    @classmethod
    def for_entity(cls, entity_name: str, entity_id: str) -> "EntityNotFound":
        return cls(f"{entity_name} with id '{entity_id}' not found")


class AuthenticationFailed(TaskBoardError):
    status_code = 403


class UpstreamFailure(TaskBoardError):
    """The identity provider (or another remote dependency) failed."""
