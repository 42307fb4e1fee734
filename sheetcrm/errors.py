"""Exceptions raised by the gateway and mapped to HTTP statuses by the API."""


class CRMError(Exception):
    """Base class for errors that carry a client-facing message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationMissingError(CRMError):
    """A required setting (sheet id, credentials) is absent."""

    status_code = 500


class ValidationFailedError(CRMError):
    """A required body or query field is missing or unusable."""

    status_code = 400


class SheetNotFoundError(CRMError):
    """No tab with the given title exists in the spreadsheet."""

    status_code = 404

    def __init__(self, title: str):
        super().__init__(f'Sheet "{title}" not found')
        self.title = title


class ConflictError(CRMError):
    """The addressed row no longer holds the expected record."""

    status_code = 409


class RemoteOperationError(CRMError):
    """A spreadsheet call failed; the message is what the client sees."""

    status_code = 500
