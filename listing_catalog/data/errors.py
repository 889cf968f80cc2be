from typing import Optional


class ListingFetchError(Exception):
    """Base class for failures while fetching the listing collection."""


class NetworkError(ListingFetchError):
    pass


class AuthError(ListingFetchError):
    pass


class ServerError(ListingFetchError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedDataError(ListingFetchError):
    pass
