import time
from typing import Any
from uuid import UUID

import litellm
import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from pocketnote.core.core import Service
from pocketnote.core.modules.transform.models import TransformAction, TransformLog
from pocketnote.core.modules.transform.prompts import SYSTEM_PROMPT, build_transform_prompt
from pocketnote.errors import TransformError

logger = structlog.get_logger(__name__)


class TransformService(Service):
    """Rewrites note text through an LLM provider."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("transform_logs")

    async def on_start(self) -> None:
        """Create indexes for transform logs."""
        await self._collection.create_index([("user_id", 1)])
        await self._collection.create_index([("created_at", -1)])

    async def transform(self, text: str, action: TransformAction, user_id: UUID) -> str:
        """Run a transform action over text.

        The provider output is treated as opaque replacement text. An empty reply
        falls back to the original text.

        Raises:
            TransformError: If the provider is not configured or the call fails
        """
        if not self.core.config.llm_api_key:
            raise TransformError("AI actions are not configured")

        start_time = time.time()
        usage_tokens: tuple[int, int, int] | None = None
        try:
            response = await litellm.acompletion(
                model=self.core.config.llm_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_transform_prompt(text, action)},
                ],
                api_key=self.core.config.llm_api_key,
            )
            usage = getattr(response, "usage", None)
            if usage:
                usage_tokens = (usage.prompt_tokens, usage.completion_tokens, usage.total_tokens)
            content = response.choices[0].message.content
        except Exception as e:
            logger.warning("transform_failed", action=action, user_id=user_id, error=str(e))
            await self._log(user_id, action, text, None, usage_tokens, start_time, error_message=str(e))
            raise TransformError from e

        result = (content or "").strip() or text
        await self._log(user_id, action, text, result, usage_tokens, start_time)
        return result

    async def _log(
        self,
        user_id: UUID,
        action: TransformAction,
        text: str,
        result: str | None,
        usage_tokens: tuple[int, int, int] | None,
        start_time: float,
        error_message: str | None = None,
    ) -> None:
        log = TransformLog(
            user_id=user_id,
            action=action,
            model=self.core.config.llm_model,
            input_chars=len(text),
            output_chars=len(result) if result is not None else None,
            prompt_tokens=usage_tokens[0] if usage_tokens else None,
            completion_tokens=usage_tokens[1] if usage_tokens else None,
            total_tokens=usage_tokens[2] if usage_tokens else None,
            error_message=error_message,
            duration_ms=int((time.time() - start_time) * 1000),
        )
        try:
            await self._collection.insert_one(log.to_mongo())
        except PyMongoError as e:
            # Call log is best-effort, the transform outcome stands
            logger.warning("transform_log_failed", action=action, user_id=user_id, error=str(e))
