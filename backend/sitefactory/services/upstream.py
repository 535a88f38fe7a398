# backend/sitefactory/services/upstream.py
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings
from ..errors import ConfigurationError, InternalError, UpstreamError
from ..utils.logging import service_logger

M = TypeVar("M", bound=BaseModel)

MAX_ERROR_BODY_LENGTH = 500
PARSE_FAILURE_MESSAGE = "Unable to parse response"


class UpstreamService:
    """Base for services that forward a request to one third-party API"""

    service_name = "upstream"

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self.client = client
        self.settings = settings

    def require(self, value: Optional[str], setting_name: str) -> str:
        if not value or not value.strip():
            service_logger.error(f"{setting_name} is not configured", extra={
                "service": self.service_name
            })
            raise ConfigurationError(f"{setting_name} is not configured")
        return value.strip()

    async def fetch_json(self, method: str, url: str, **kwargs) -> Any:
        service_logger.info(f"Calling {self.service_name}", extra={
            "service": self.service_name,
            "method": method,
        })
        try:
            response = await self.client.request(
                method, url, timeout=self.settings.UPSTREAM_TIMEOUT_SECONDS, **kwargs
            )
        except httpx.HTTPError as e:
            reason = str(e) or e.__class__.__name__
            service_logger.error(f"Failed to reach {self.service_name}", extra={
                "service": self.service_name,
                "error": reason
            })
            raise UpstreamError(f"Failed to reach {self.service_name}: {reason}") from e

        if not response.is_success:
            body = response.text[:MAX_ERROR_BODY_LENGTH]
            service_logger.warning(f"{self.service_name} returned an error", extra={
                "service": self.service_name,
                "status_code": response.status_code,
                "body": body
            })
            raise UpstreamError(
                f"{self.service_name} request failed with status {response.status_code}: {body}"
            )

        try:
            return response.json()
        except ValueError as e:
            service_logger.error(f"{self.service_name} returned invalid JSON", extra={
                "service": self.service_name
            })
            raise InternalError(PARSE_FAILURE_MESSAGE) from e

    def parse(self, model: Type[M], data: Any) -> M:
        """Map an untyped upstream document onto ``model``"""
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            service_logger.error(f"Unexpected {self.service_name} response shape", extra={
                "service": self.service_name,
                "error": str(e)
            })
            raise InternalError(PARSE_FAILURE_MESSAGE) from e

    def unparseable(self) -> InternalError:
        service_logger.error(f"No usable field in {self.service_name} response", extra={
            "service": self.service_name
        })
        return InternalError(PARSE_FAILURE_MESSAGE)
