from typing import Any, Dict, Optional

from fastapi import status


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.extra = extra

    @property
    def detail(self) -> Any:
        """HTTPException detail: the bare message, or message plus extra fields (e.g. conflicts)."""
        if not self.extra:
            return self.message
        return {"message": self.message, **self.extra}


class NotFoundError(ServiceError):
    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity} not found", status.HTTP_404_NOT_FOUND)
