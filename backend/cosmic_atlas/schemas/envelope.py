"""
Response envelope shared by every vendor client and API route.

A response is either a success carrying ``data`` or a failure carrying
``error``; never both.
"""

import time
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, model_validator

T = TypeVar("T")


def now_ms() -> int:
    return int(time.time() * 1000)


class ResponseMetadata(BaseModel):
    source: str
    timestamp: int
    cached: bool = False


class APIError(BaseModel):
    code: str
    message: str
    status_code: Optional[int] = None


class APIResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[APIError] = None
    metadata: ResponseMetadata

    @model_validator(mode="after")
    def _check_tag(self):
        if self.success and self.error is not None:
            raise ValueError("successful response cannot carry an error")
        if not self.success:
            if self.error is None:
                raise ValueError("failed response must carry an error")
            if self.data is not None:
                raise ValueError("failed response cannot carry data")
        return self

    @classmethod
    def ok(
        cls,
        data: Any,
        source: str,
        cached: bool = False,
        timestamp: Optional[int] = None,
    ) -> "APIResponse":
        return cls(
            success=True,
            data=data,
            metadata=ResponseMetadata(
                source=source,
                timestamp=timestamp if timestamp is not None else now_ms(),
                cached=cached,
            ),
        )

    @classmethod
    def fail(
        cls,
        code: str,
        message: str,
        source: str,
        status_code: Optional[int] = None,
    ) -> "APIResponse":
        return cls(
            success=False,
            error=APIError(code=code, message=message, status_code=status_code),
            metadata=ResponseMetadata(source=source, timestamp=now_ms(), cached=False),
        )
