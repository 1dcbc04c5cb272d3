"""Suggests a category and tags for a prompt draft."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from pydantic import ValidationError as PayloadValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from workshop.infrastructure.database.repositories.category_repository import SqlCategoryRepository
from workshop.infrastructure.database.repositories.tag_repository import SqlTagRepository
from workshop.modules.categories.models import Category
from workshop.modules.categories.repository import CategoryRepository
from workshop.modules.executions.invoker import CompletionInvoker
from workshop.modules.tags.models import Tag
from workshop.modules.tags.repository import TagRepository

from .heuristics import suggest_category, suggest_tags
from .models import Suggestion, SuggestionPayload, SuggestionSource

logger = logging.getLogger(__name__)

HEURISTIC_REASONING = "Generated using keyword-based analysis"
FALLBACK_SUFFIX = " (Fallback: AI unavailable)"
COMPLETION_SUFFIX = " (AI-powered analysis)"

ANALYSIS_PROMPT = """You are an expert at analyzing prompts and categorizing them. Analyze the following prompt and suggest the most appropriate category and tags.

PROMPT TO ANALYZE:
Name: {name}
Content: {content}

AVAILABLE CATEGORIES:
{categories}

AVAILABLE TAGS:
{tags}

Respond with a single JSON object in this format:
{{
  "suggestedCategoryId": "category-id-or-null",
  "suggestedTagIds": ["tag-id-1", "tag-id-2"],
  "reasoning": "Brief explanation of why these suggestions were made"
}}

Rules:
1. Choose only ONE category that best fits the prompt's purpose
2. Choose up to {max_tags} tags that are most relevant
3. If no good match exists, use null for category or an empty array for tags
4. Return valid JSON only"""


class SuggestionRejected(ValueError):
    """A completion reply did not pass validation."""


def _catalog_lines(entities: Sequence[Category] | Sequence[Tag]) -> str:
    if not entities:
        return "- (none)"
    return "\n".join(f'- ID: {e.id}, Name: "{e.name}", Description: "{e.description}"' for e in entities)


def parse_completion_reply(
    reply: str,
    categories: Sequence[Category],
    tags: Sequence[Tag],
    max_tags: int,
) -> Suggestion:
    """Validate a completion reply; raise :class:`SuggestionRejected` on any deviation."""
    start = reply.find("{")
    end = reply.rfind("}")
    if start < 0 or end <= start:
        raise SuggestionRejected("reply contains no JSON object")
    try:
        payload = SuggestionPayload.model_validate_json(reply[start : end + 1])
    except PayloadValidationError as exc:
        raise SuggestionRejected(f"reply does not match the expected shape: {exc.error_count()} error(s)") from exc

    category_ids = {category.id for category in categories}
    tag_ids = {tag.id for tag in tags}
    category_id = payload.category_id or None
    if category_id is not None and category_id not in category_ids:
        raise SuggestionRejected(f"unknown category id {category_id!r}")
    unknown = [tag_id for tag_id in payload.tag_ids if tag_id not in tag_ids]
    if unknown:
        raise SuggestionRejected(f"unknown tag ids {unknown!r}")
    suggested_tags = list(dict.fromkeys(payload.tag_ids))
    if len(suggested_tags) > max_tags:
        raise SuggestionRejected(f"{len(suggested_tags)} tags suggested, at most {max_tags} allowed")

    return Suggestion(
        category_id=category_id,
        tag_ids=suggested_tags,
        reasoning=(payload.reasoning or "AI analysis completed") + COMPLETION_SUFFIX,
        source=SuggestionSource.COMPLETION,
    )


class SuggestionService:
    def __init__(
        self,
        categories: CategoryRepository,
        tags: TagRepository,
        invoker: Optional[CompletionInvoker] = None,
        *,
        max_tags: int = 3,
        use_completion: bool = True,
    ) -> None:
        self._categories = categories
        self._tags = tags
        self._invoker = invoker
        self._max_tags = max_tags
        self._use_completion = use_completion

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        invoker: Optional[CompletionInvoker] = None,
        *,
        max_tags: int = 3,
        use_completion: bool = True,
    ) -> "SuggestionService":
        return cls(
            SqlCategoryRepository(session),
            SqlTagRepository(session),
            invoker,
            max_tags=max_tags,
            use_completion=use_completion,
        )

    def heuristic(self, name: str, content: str, categories: Sequence[Category], tags: Sequence[Tag]) -> Suggestion:
        text = f"{name} {content}".lower()
        return Suggestion(
            category_id=suggest_category(text, categories),
            tag_ids=suggest_tags(text, tags, self._max_tags),
            reasoning=HEURISTIC_REASONING,
            source=SuggestionSource.HEURISTIC,
        )

    async def suggest(self, name: str, content: str) -> Suggestion:
        categories = list(await self._categories.list_categories())
        tags = list(await self._tags.list_tags())

        if self._use_completion and self._invoker is not None and self._invoker.available:
            prompt = ANALYSIS_PROMPT.format(
                name=name,
                content=content,
                categories=_catalog_lines(categories),
                tags=_catalog_lines(tags),
                max_tags=self._max_tags,
            )
            result = await self._invoker.invoke(prompt, label="suggestion analysis")
            if result.text is not None:
                try:
                    return parse_completion_reply(result.text, categories, tags, self._max_tags)
                except SuggestionRejected as exc:
                    logger.warning("Discarding completion suggestion: %s", exc)
            else:
                logger.info("No completion reply for suggestions (%s)", result.outcome.value)

        suggestion = self.heuristic(name, content, categories, tags)
        suggestion.reasoning += FALLBACK_SUFFIX
        return suggestion
