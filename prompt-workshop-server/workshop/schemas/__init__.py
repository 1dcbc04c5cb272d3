"""Pydantic schemas used across the HTTP surface."""
from datetime import datetime
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from workshop.modules.categories.models import CategoryCreateInput, CategoryUpdateInput
from workshop.modules.prompts.models import (
    PromptTemplateCreateInput,
    PromptTemplateUpdateInput,
    PromptVariable,
)
from workshop.modules.prompts.substitution import render_value
from workshop.modules.tags.models import TagCreateInput, TagUpdateInput

VariableType = Literal["string", "number", "boolean"]


def _partial(payload: BaseModel, target):
    """Build a domain update input carrying only the fields present in the request."""
    return target(**{name: getattr(payload, name) for name in payload.model_fields_set})


class PromptVariableSchema(BaseModel):
    name: str
    description: str = ""
    type: VariableType = "string"
    required: bool = False
    default_value: Optional[Union[str, int, float, bool]] = None

    model_config = ConfigDict(from_attributes=True)

    def to_domain(self) -> PromptVariable:
        return PromptVariable(
            name=self.name,
            description=self.description,
            type=self.type,
            required=self.required,
            default_value=None if self.default_value is None else render_value(self.default_value),
        )


class PromptTemplateBase(BaseModel):
    name: str = Field(..., max_length=200)
    description: str = ""
    content: str
    category_id: Optional[str] = None
    tag_ids: list[str] = Field(default_factory=list)
    variables: list[PromptVariableSchema] = Field(default_factory=list)


class PromptTemplateCreate(PromptTemplateBase):
    def to_domain(self) -> PromptTemplateCreateInput:
        return PromptTemplateCreateInput(
            name=self.name,
            description=self.description,
            content=self.content,
            category_id=self.category_id,
            tag_ids=list(self.tag_ids),
            variables=[variable.to_domain() for variable in self.variables],
        )


class PromptTemplateUpdate(BaseModel):
    """Partial update; fields left out of the request body stay unchanged."""

    name: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None
    content: Optional[str] = None
    category_id: Optional[str] = None
    tag_ids: Optional[list[str]] = None
    variables: Optional[list[PromptVariableSchema]] = None

    def to_domain(self) -> PromptTemplateUpdateInput:
        update = _partial(self, PromptTemplateUpdateInput)
        if isinstance(update.variables, list):
            update.variables = [variable.to_domain() for variable in update.variables]
        return update


class PromptTemplateResponse(PromptTemplateBase):
    id: str
    yaml_template: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ExecutePromptRequest(BaseModel):
    prompt_template_id: str
    variables: dict[str, Any] = Field(default_factory=dict)


class ExecutionResponse(BaseModel):
    id: str
    prompt_template_id: str
    variables: dict[str, Any] = Field(default_factory=dict)
    result: str
    status: str
    attempts: int
    is_fallback: bool
    executed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ImportYamlRequest(BaseModel):
    yaml_content: str


class SuggestionRequest(BaseModel):
    name: str = ""
    content: str = ""


class SuggestionResponse(BaseModel):
    suggested_category_id: Optional[str] = None
    suggested_tag_ids: list[str] = Field(default_factory=list)
    reasoning: str
    source: str


class VariableReconcileRequest(BaseModel):
    content: str = ""
    variables: list[PromptVariableSchema] = Field(default_factory=list)


class VariableRenameRequest(VariableReconcileRequest):
    old_name: str
    new_name: str


class VariableRemoveRequest(VariableReconcileRequest):
    name: str


class VariableEditResponse(BaseModel):
    content: str
    variables: list[PromptVariableSchema]
    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)


class CategoryCreate(BaseModel):
    name: str = Field(..., max_length=100)
    description: str = ""
    color: str = Field(default="#3B82F6", max_length=20)

    def to_domain(self) -> CategoryCreateInput:
        return CategoryCreateInput(name=self.name, description=self.description, color=self.color)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=20)

    def to_domain(self) -> CategoryUpdateInput:
        return _partial(self, CategoryUpdateInput)


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str
    color: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TagCreate(BaseModel):
    name: str = Field(..., max_length=50)
    description: str = Field(default="", max_length=500)
    color: str = Field(default="#3B82F6", max_length=20)

    def to_domain(self) -> TagCreateInput:
        return TagCreateInput(name=self.name, description=self.description, color=self.color)


class TagUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = Field(default=None, max_length=500)
    color: Optional[str] = Field(default=None, max_length=20)

    def to_domain(self) -> TagUpdateInput:
        return _partial(self, TagUpdateInput)


class TagResponse(CategoryResponse):
    pass
