"""
CMS error taxonomy. Each error carries the HTTP status the error handler returns.
"""


class CMSError(Exception):
    """Base class for errors raised by CMS operations"""
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__

    def to_dict(self):
        return {'success': False, 'error': self.__class__.__name__, 'message': self.message}


class Unauthenticated(CMSError):
    """Authentication required"""
    status_code = 401


class Unauthorized(CMSError):
    """Unauthorized: Admin access required"""
    status_code = 403


class ValidationFailed(CMSError):
    """Validation failed"""
    status_code = 400

    def __init__(self, reason):
        super().__init__(f'Validation failed: {reason}')
        self.reason = reason


class StorageFailure(CMSError):
    """Storage operation failed"""
    status_code = 500


class NotFound(CMSError):
    """Not found"""
    status_code = 404
