class StoreError(Exception):
    """Raised when a call against the posts store fails"""


class DecodeError(StoreError):
    """Raised when a stored record cannot be parsed into a Post"""
