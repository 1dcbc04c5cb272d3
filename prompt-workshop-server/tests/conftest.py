"""Shared fixtures: in-memory repositories and an isolated SQLite database."""
import os
import tempfile
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

_TMP_DIR = tempfile.mkdtemp(prefix="prompt-workshop-tests-")
os.environ["DATABASE__URL"] = f"sqlite+aiosqlite:///{Path(_TMP_DIR) / 'test.db'}"
os.environ["COMPLETION__PROVIDER"] = "openai"
os.environ.pop("COMPLETION__API_KEY", None)
os.environ["ENVIRONMENT"] = "test"

import pytest

from workshop.modules.categories.models import Category
from workshop.modules.executions.models import ExecutionRecord
from workshop.modules.prompts.models import PromptTemplate, PromptVariable
from workshop.modules.tags.models import Tag


# =============================================================================
# In-memory repositories
# =============================================================================

class _Clock:
    """Strictly increasing timestamps so ordering assertions are stable."""

    def __init__(self):
        self._now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


class FakeCategoryRepository:
    def __init__(self, templates: Optional["FakePromptRepository"] = None):
        self.items: Dict[str, Category] = {}
        self.templates = templates

    def seed(self, name: str, description: str = "", category_id: Optional[str] = None) -> Category:
        category = Category(id=category_id or str(uuid.uuid4()), name=name, description=description, color="#3B82F6")
        self.items[category.id] = category
        return category

    async def list_categories(self):
        return sorted(self.items.values(), key=lambda item: item.name)

    async def get_by_id(self, category_id):
        return self.items.get(category_id)

    async def get_by_name(self, name):
        for item in self.items.values():
            if item.name.casefold() == name.strip().casefold():
                return item
        return None

    async def create(self, *, name, description, color):
        category = Category(id=str(uuid.uuid4()), name=name, description=description, color=color)
        self.items[category.id] = category
        return category

    async def update(self, category_id, *, name=None, description=None, color=None):
        current = self.items.get(category_id)
        if current is None:
            return None
        updated = replace(
            current,
            name=name if name is not None else current.name,
            description=description if description is not None else current.description,
            color=color if color is not None else current.color,
        )
        self.items[category_id] = updated
        return updated

    async def count_templates(self, category_id):
        if self.templates is None:
            return 0
        return sum(1 for item in self.templates.items.values() if item.category_id == category_id)

    async def delete(self, category_id):
        return self.items.pop(category_id, None) is not None


class FakeTagRepository:
    def __init__(self):
        self.items: Dict[str, Tag] = {}

    def seed(self, name: str, description: str = "", tag_id: Optional[str] = None) -> Tag:
        tag = Tag(id=tag_id or str(uuid.uuid4()), name=name, description=description, color="#3B82F6")
        self.items[tag.id] = tag
        return tag

    async def list_tags(self):
        return sorted(self.items.values(), key=lambda item: item.name)

    async def get_by_id(self, tag_id):
        return self.items.get(tag_id)

    async def get_by_name(self, name):
        for item in self.items.values():
            if item.name.casefold() == name.strip().casefold():
                return item
        return None

    async def create(self, *, name, description, color):
        tag = Tag(id=str(uuid.uuid4()), name=name, description=description, color=color)
        self.items[tag.id] = tag
        return tag

    async def update(self, tag_id, *, name=None, description=None, color=None):
        current = self.items.get(tag_id)
        if current is None:
            return None
        updated = replace(
            current,
            name=name if name is not None else current.name,
            description=description if description is not None else current.description,
            color=color if color is not None else current.color,
        )
        self.items[tag_id] = updated
        return updated

    async def delete(self, tag_id):
        return self.items.pop(tag_id, None) is not None


class FakePromptRepository:
    def __init__(self):
        self.items: Dict[str, PromptTemplate] = {}
        self.clock = _Clock()
        self.deleted: List[str] = []

    async def list_templates(self):
        return sorted(self.items.values(), key=lambda item: item.updated_at, reverse=True)

    async def get_by_id(self, template_id):
        return self.items.get(template_id)

    async def create(self, *, name, description, content, variables, category_id, tag_ids, yaml_template):
        now = self.clock()
        template = PromptTemplate(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            content=content,
            variables=list(variables),
            category_id=category_id,
            tag_ids=list(tag_ids),
            yaml_template=yaml_template,
            created_at=now,
            updated_at=now,
        )
        self.items[template.id] = template
        return template

    async def update(self, template_id, *, name, description, content, variables, category_id, tag_ids,
                     yaml_template, updated_at):
        current = self.items.get(template_id)
        if current is None:
            return None
        updated = replace(
            current,
            name=name,
            description=description,
            content=content,
            variables=list(variables),
            category_id=category_id,
            tag_ids=list(tag_ids),
            yaml_template=yaml_template,
            updated_at=self.clock(),
        )
        self.items[template_id] = updated
        return updated

    async def delete(self, template_id):
        if self.items.pop(template_id, None) is None:
            return False
        self.deleted.append(template_id)
        return True

    def seed(self, name: str, content: str, variables: Optional[List[PromptVariable]] = None, **kwargs) -> PromptTemplate:
        now = self.clock()
        template = PromptTemplate(
            id=kwargs.pop("template_id", str(uuid.uuid4())),
            name=name,
            description=kwargs.pop("description", ""),
            content=content,
            variables=list(variables or []),
            created_at=now,
            updated_at=now,
            **kwargs,
        )
        self.items[template.id] = template
        return template


class FakeExecutionRepository:
    def __init__(self):
        self.records: List[ExecutionRecord] = []
        self.clock = _Clock()

    async def append(self, *, prompt_template_id, variables, result, status, attempts):
        record = ExecutionRecord(
            id=str(uuid.uuid4()),
            prompt_template_id=prompt_template_id,
            variables=dict(variables),
            result=result,
            status=status,
            attempts=attempts,
            executed_at=self.clock(),
        )
        self.records.append(record)
        return record

    async def list_for_template(self, prompt_template_id, limit=None):
        matching = [record for record in self.records if record.prompt_template_id == prompt_template_id]
        matching.sort(key=lambda record: record.executed_at, reverse=True)
        return matching[:limit] if limit is not None else matching


class ScriptedCompletion:
    """Completion capability that replays a list of replies or exceptions."""

    def __init__(self, *replies: Any):
        self.replies = list(replies)
        self.calls: List[str] = []

    async def complete(self, text: str, timeout: Optional[float] = None) -> str:
        self.calls.append(text)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply


class RecordingSleep:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def prompt_repo():
    return FakePromptRepository()


@pytest.fixture
def category_repo(prompt_repo):
    return FakeCategoryRepository(prompt_repo)


@pytest.fixture
def tag_repo():
    return FakeTagRepository()


@pytest.fixture
def execution_repo():
    return FakeExecutionRepository()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
