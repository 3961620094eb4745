"""
Custom exceptions for the Tovably client.
Network failures and form validation surface through these; blob parsing
problems never do (they fall back to defaults instead).
"""


class TovablyError(Exception):
    """Base exception for Tovably"""
    def __init__(self, message="An error occurred"):
        self.message = message
        super().__init__(self.message)


class ApiError(TovablyError):
    """A request to the Tovably API failed"""
    def __init__(self, message="Request failed", status_code=None):
        self.status_code = status_code
        super().__init__(message)


class ValidationError(TovablyError):
    """Form input rejected before any request was sent"""
    def __init__(self, message="Validation failed", field=None):
        self.field = field
        super().__init__(message)


class ConfirmationRequiredError(TovablyError):
    """A destructive action was attempted without explicit confirmation"""
    def __init__(self, action="This action"):
        self.action = action
        super().__init__(f"{action} requires confirmation")
