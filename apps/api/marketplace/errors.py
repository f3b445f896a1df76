from fastapi import HTTPException, status


class MarketplaceError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=self.status_code, detail=detail)


class ValidationError(MarketplaceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT


class UpstreamError(MarketplaceError):
    """Object store or other upstream failure, reported without upstream detail."""

    status_code = status.HTTP_502_BAD_GATEWAY
