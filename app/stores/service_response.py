from fastapi import HTTPException
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ServiceError:
    message: str


@dataclass
class ServiceResponse(Generic[T]):
    """Exactly one of response / error is set"""

    response: Optional[T] = None
    error: Optional[ServiceError] = None


async def call_service(operation: Awaitable[T]) -> ServiceResponse[T]:
    """Await a service coroutine and fold any failure into ServiceResponse.error"""
    try:
        return ServiceResponse(response=await operation)
    except HTTPException as e:
        return ServiceResponse(error=ServiceError(message=str(e.detail)))
    except Exception as e:
        logger.error(f"Unexpected service failure: {str(e)}")
        return ServiceResponse(error=ServiceError(message=str(e) or e.__class__.__name__))
