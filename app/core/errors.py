# File: app/core/errors.py

"""
Errors raised by the user handlers and stores.

Each class carries the status code that describes it. The API only uses
that code when DISTINCT_ERROR_STATUS is enabled; otherwise every one of
them is answered with a 500.
"""

from fastapi import status

REQUIRED_PARAMS_MESSAGE = "Please provide all the required parameters.."


class UserServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFieldsError(UserServiceError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = REQUIRED_PARAMS_MESSAGE):
        super().__init__(message)


class UserNotFoundError(UserServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class EmailAlreadyRegisteredError(UserServiceError):
    status_code = status.HTTP_409_CONFLICT


class InvalidCredentialsError(UserServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NoUsersError(UserServiceError):
    pass
