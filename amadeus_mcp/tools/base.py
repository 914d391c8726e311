import functools
import logging
import re
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ..errors import AmadeusMCPError, UpstreamError

logger = logging.getLogger(__name__)

_TIME_SUFFIX = re.compile(r"[T ].*$")


def normalize_date(value: Optional[str]) -> Optional[str]:
    """Strip any time-of-day suffix: '2025-12-15T10:00:00' -> '2025-12-15'."""
    if value is None:
        return None
    return _TIME_SUFFIX.sub("", value.strip())


def records(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """The 'data' list of a provider payload, never None."""
    data = payload.get("data") if payload else None
    if data is None:
        return []
    return data if isinstance(data, list) else [data]


def provider_meta(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Keep the provider's side channels (meta, dictionaries, warnings) next to the data."""
    extras = {key: payload[key] for key in ("meta", "dictionaries", "warnings") if payload.get(key)}
    return extras or None


class OrchestrationResult(BaseModel):
    """Uniform envelope returned by every tool handler."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: Union[List[Any], Dict[str, Any]] = Field(default_factory=list)
    count: Optional[int] = None
    meta: Optional[Dict[str, Any]] = None
    message: Optional[str] = None
    search_params: Optional[Dict[str, Any]] = Field(default=None, alias="searchParams")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    @property
    def is_mock(self) -> bool:
        return bool(self.meta and self.meta.get("mock"))


class ProviderTools:
    """Shared state for the tool handler mixins: the injected provider client."""

    def __init__(self, client, rate_limit_attempts: int = 3, rate_limit_delay: float = 2.0):
        self.client = client
        self.rate_limit_attempts = rate_limit_attempts
        self.rate_limit_delay = rate_limit_delay

    @property
    def offline(self) -> bool:
        return getattr(self.client, "offline", False)


def provider_operation(failure_prefix: str):
    """Wrap a tool handler.

    Without credentials the handler is never entered: a mock record tagged with
    the handler name is returned. With credentials, provider errors are
    re-raised with ``failure_prefix`` so the caller sees which operation failed.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, args, *extra, **kwargs):
            if self.offline:
                arguments = args.model_dump(exclude_none=True) if isinstance(args, BaseModel) else dict(args)
                return OrchestrationResult(
                    data=[self.client.mock_record(func.__name__, arguments)],
                    count=1,
                    meta={"mock": True},
                )
            try:
                return await func(self, args, *extra, **kwargs)
            except AmadeusMCPError as e:
                logger.error(f"{failure_prefix}: {e}", extra={"tool": func.__name__})
                raise e.with_prefix(failure_prefix) from e
            except httpx.HTTPError as e:
                logger.error(f"{failure_prefix}: {e}", extra={"tool": func.__name__})
                raise UpstreamError(f"{failure_prefix}: {e}") from e

        wrapper.provider_backed = True
        return wrapper

    return decorator
