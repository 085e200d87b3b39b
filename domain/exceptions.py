# domain/exceptions.py
from __future__ import annotations


class FormBindError(Exception):
    """Base error for form binding."""


class FormError(FormBindError):
    pass


class AlreadyBoundError(FormError):
    pass


class InvalidFormNameError(FormError):
    pass


class UnexpectedTypeError(FormBindError):
    def __init__(self, value: object, expected: str) -> None:
        super().__init__(f'Expected argument of type "{expected}", "{type(value).__name__}" given')
        self.value = value
        self.expected = expected


class UploadedFileNotFoundError(FormBindError):
    def __init__(self, path: str) -> None:
        super().__init__(f'The file "{path}" does not exist')
        self.path = path
