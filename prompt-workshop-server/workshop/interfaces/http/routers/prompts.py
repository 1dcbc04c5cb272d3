"""Prompt template endpoints: CRUD, execution, interchange and editor helpers."""

import re
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from workshop.interfaces.http.deps import (
    get_db_session,
    get_execution_service,
    get_prompt_service,
    get_suggestion_service,
)
from workshop.interfaces.http.errors import http_error
from workshop.modules.common import WorkshopError
from workshop.modules.executions.service import ExecutionService
from workshop.modules.prompts.models import PromptTemplateFilter
from workshop.modules.prompts.reconciler import ReconcileResult, reconcile, remove_from_template, rename_in_template
from workshop.modules.prompts.service import PromptService
from workshop.modules.suggestions.service import SuggestionService
from workshop.schemas import (
    ExecutePromptRequest,
    ExecutionResponse,
    ImportYamlRequest,
    PromptTemplateCreate,
    PromptTemplateResponse,
    PromptTemplateUpdate,
    PromptVariableSchema,
    SuggestionRequest,
    SuggestionResponse,
    VariableEditResponse,
    VariableReconcileRequest,
    VariableRemoveRequest,
    VariableRenameRequest,
)

router = APIRouter()

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9_-]+")


def _to_schema(template) -> PromptTemplateResponse:
    return PromptTemplateResponse.model_validate(template)


def _edit_response(content: str, result: ReconcileResult) -> VariableEditResponse:
    return VariableEditResponse(
        content=content,
        variables=[PromptVariableSchema.model_validate(variable) for variable in result.variables],
        added=result.added,
        removed=result.removed,
    )


@router.get("", response_model=list[PromptTemplateResponse], summary="List prompt templates")
async def list_prompts(
    category_id: Optional[str] = Query(default=None),
    tag_id: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    service: PromptService = Depends(get_prompt_service),
):
    filters = PromptTemplateFilter(category_id=category_id, tag_id=tag_id, search=search)
    templates = await service.list_templates(filters)
    return [_to_schema(template) for template in templates]


@router.post("", response_model=PromptTemplateResponse, status_code=status.HTTP_201_CREATED, summary="Create a prompt template")
async def create_prompt(
    payload: PromptTemplateCreate,
    db: AsyncSession = Depends(get_db_session),
    service: PromptService = Depends(get_prompt_service),
):
    try:
        template = await service.create_template(payload.to_domain())
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
    return _to_schema(template)


@router.post("/execute", response_model=ExecutionResponse, summary="Execute a prompt template")
async def execute_prompt(
    payload: ExecutePromptRequest,
    db: AsyncSession = Depends(get_db_session),
    service: ExecutionService = Depends(get_execution_service),
):
    try:
        record = await service.execute(payload.prompt_template_id, payload.variables)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
    return ExecutionResponse.model_validate(record)


@router.post("/import-yaml", response_model=PromptTemplateResponse, status_code=status.HTTP_201_CREATED, summary="Import a template from YAML")
async def import_prompt(
    payload: ImportYamlRequest,
    db: AsyncSession = Depends(get_db_session),
    service: PromptService = Depends(get_prompt_service),
):
    try:
        template = await service.import_template(payload.yaml_content)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
    return _to_schema(template)


@router.post("/suggest", response_model=SuggestionResponse, summary="Suggest a category and tags")
async def suggest(payload: SuggestionRequest, service: SuggestionService = Depends(get_suggestion_service)):
    suggestion = await service.suggest(payload.name, payload.content)
    return SuggestionResponse(
        suggested_category_id=suggestion.category_id,
        suggested_tag_ids=suggestion.tag_ids,
        reasoning=suggestion.reasoning,
        source=suggestion.source.value,
    )


@router.post("/variables/reconcile", response_model=VariableEditResponse, summary="Align variables with content")
async def reconcile_variables(payload: VariableReconcileRequest):
    variables = [variable.to_domain() for variable in payload.variables]
    return _edit_response(payload.content, reconcile(payload.content, variables))


@router.post("/variables/rename", response_model=VariableEditResponse, summary="Rename a variable")
async def rename_variable(payload: VariableRenameRequest):
    variables = [variable.to_domain() for variable in payload.variables]
    try:
        content, result = rename_in_template(payload.content, variables, payload.old_name, payload.new_name)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    return _edit_response(content, result)


@router.post("/variables/remove", response_model=VariableEditResponse, summary="Remove a variable")
async def remove_variable(payload: VariableRemoveRequest):
    variables = [variable.to_domain() for variable in payload.variables]
    content, result = remove_from_template(payload.content, variables, payload.name)
    return _edit_response(content, result)


@router.get("/{prompt_id}", response_model=PromptTemplateResponse, summary="Get a prompt template")
async def get_prompt(prompt_id: str, service: PromptService = Depends(get_prompt_service)):
    try:
        template = await service.get_template(prompt_id)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    return _to_schema(template)


@router.put("/{prompt_id}", response_model=PromptTemplateResponse, summary="Update a prompt template")
async def update_prompt(
    prompt_id: str,
    payload: PromptTemplateUpdate,
    db: AsyncSession = Depends(get_db_session),
    service: PromptService = Depends(get_prompt_service),
):
    try:
        template = await service.update_template(prompt_id, payload.to_domain())
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()
    return _to_schema(template)


@router.delete("/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a prompt template")
async def delete_prompt(
    prompt_id: str,
    db: AsyncSession = Depends(get_db_session),
    service: PromptService = Depends(get_prompt_service),
):
    try:
        await service.delete_template(prompt_id)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    await db.commit()


@router.get("/{prompt_id}/executions", response_model=list[ExecutionResponse], summary="List executions")
async def list_executions(
    prompt_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    service: ExecutionService = Depends(get_execution_service),
):
    try:
        records = await service.list_executions(prompt_id, limit)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    return [ExecutionResponse.model_validate(record) for record in records]


@router.get("/{prompt_id}/export-yaml", summary="Export a template as YAML")
async def export_prompt(prompt_id: str, service: PromptService = Depends(get_prompt_service)):
    try:
        template = await service.get_template(prompt_id)
        text = await service.export_template(prompt_id)
    except WorkshopError as exc:
        raise http_error(exc) from exc
    filename = _UNSAFE_FILENAME.sub("_", template.name).strip("_") or "prompt"
    return Response(
        content=text,
        media_type="text/yaml",
        headers={"Content-Disposition": f'attachment; filename="{filename}.yaml"'},
    )
