"""
School Site Errors
Exceptions raised by services and translated to JSON by the blueprints.
"""


class SchoolSiteError(Exception):
    """Base error. Carries the HTTP status the API answers with."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchoolSiteError):
    """A required field is missing, empty or malformed."""
    status_code = 400


class NoImagesAvailable(ValidationError):
    """Every upload failed and no retained image is left."""

    def __init__(self, message: str = 'At least one image is required'):
        super().__init__(message)


class NotFound(SchoolSiteError):
    """An identifier does not resolve to a stored entity."""
    status_code = 404


class UploadFailure(SchoolSiteError):
    """A single image upload failed. Non-fatal inside the reconciler."""
    status_code = 502


class ApiError(SchoolSiteError):
    """An API call made by the console client answered with an error."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code
