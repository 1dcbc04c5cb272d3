"""Simple dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from workshop.core.config import Settings, get_settings
from workshop.infrastructure.completion import CompletionClient
from workshop.infrastructure.database.session import get_engine
from workshop.modules.executions.invoker import CompletionInvoker
from workshop.modules.executions.models import RetryPolicy

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    completion_client: Optional[CompletionClient] = field(default=None)

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, completion client) are initialised."""
        get_engine()
        completion = self.settings.completion
        if self.completion_client is None and completion.is_configured:
            self.completion_client = CompletionClient(completion)
            logger.info("Completion provider %s ready (model %s)", completion.provider, completion.model)
        elif self.completion_client is None:
            logger.warning("No completion provider configured; executions will use fallback results")

    def retry_policy(self) -> RetryPolicy:
        execution = self.settings.execution
        return RetryPolicy(
            max_retries=execution.max_retries,
            base_delay=execution.base_delay_seconds,
            multiplier=execution.backoff_multiplier,
        )

    def build_invoker(self) -> CompletionInvoker:
        return CompletionInvoker(
            self.completion_client,
            self.retry_policy(),
            timeout=self.settings.completion.timeout_seconds,
        )

    async def aclose(self) -> None:
        if self.completion_client is not None:
            await self.completion_client.aclose()
            self.completion_client = None


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
