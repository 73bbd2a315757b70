"""Exception types shared across the application."""


class AppError(Exception):
    """Base class for application errors."""


class NotFoundError(AppError):
    """A requested entity does not exist. Rendered as 404 by the API helpers."""


class TraversalError(AppError):
    """The static asset directory could not be walked."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path
