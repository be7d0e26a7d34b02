"""Error taxonomy shared by the store and the API layer."""


class StoryShelfError(Exception):
    """Base class for story library errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StoryShelfError):
    """A required field is missing or empty."""

    status_code = 400


class NotFoundError(StoryShelfError):
    """No story exists with the requested id."""

    status_code = 404


class StoreError(StoryShelfError):
    """The underlying database failed."""

    status_code = 500
