"""Project material catalog endpoints."""

from fastapi import APIRouter, Depends, status

from stockledger.api.dependencies import (
    get_actor_user_id,
    get_catalog,
    get_create_material_use_case,
)
from stockledger.application.dto.requests import CreateMaterialRequest, UpdateMaterialRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    MaterialListResponse,
    MaterialResponse,
)
from stockledger.application.use_cases import CreateMaterialUseCase, material_to_response
from stockledger.core.services import MaterialCatalog

router = APIRouter(prefix="/api/projects/{project_id}/materials", tags=["materials"])


@router.post(
    "",
    response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_material(
    project_id: str,
    request: CreateMaterialRequest,
    actor_user_id: str = Depends(get_actor_user_id),
    use_case: CreateMaterialUseCase = Depends(get_create_material_use_case),
) -> MaterialResponse:
    """Register a material with zero stock."""
    material = await use_case.execute(project_id, request, actor_user_id)
    return use_case.to_response(material)


@router.get("", response_model=MaterialListResponse)
async def list_materials(
    project_id: str,
    include_archived: bool = False,
    actor_user_id: str = Depends(get_actor_user_id),
    catalog: MaterialCatalog = Depends(get_catalog),
) -> MaterialListResponse:
    """List a project's materials by name."""
    materials = await catalog.list_materials(
        project_id, actor_user_id, include_archived=include_archived
    )
    return MaterialListResponse(
        items=[material_to_response(m) for m in materials],
        total=len(materials),
    )


@router.get("/low-stock", response_model=MaterialListResponse)
async def list_low_stock(
    project_id: str,
    actor_user_id: str = Depends(get_actor_user_id),
    catalog: MaterialCatalog = Depends(get_catalog),
) -> MaterialListResponse:
    """List active materials at or below their minimum level."""
    materials = await catalog.list_low_stock(project_id, actor_user_id)
    return MaterialListResponse(
        items=[material_to_response(m) for m in materials],
        total=len(materials),
    )


@router.patch(
    "/{material_id}",
    response_model=MaterialResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_material(
    project_id: str,
    material_id: str,
    request: UpdateMaterialRequest,
    actor_user_id: str = Depends(get_actor_user_id),
    catalog: MaterialCatalog = Depends(get_catalog),
) -> MaterialResponse:
    """Change name, unit or minimum level. Stock is never edited here."""
    material = await catalog.update_material(
        material_id,
        project_id,
        actor_user_id,
        name=request.name,
        unit=request.unit,
        min_level=request.min_level,
    )
    return material_to_response(material)


@router.post(
    "/{material_id}/archive",
    response_model=MaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def archive_material(
    project_id: str,
    material_id: str,
    actor_user_id: str = Depends(get_actor_user_id),
    catalog: MaterialCatalog = Depends(get_catalog),
) -> MaterialResponse:
    """Archive a material; it stops accepting transactions."""
    material = await catalog.archive_material(material_id, project_id, actor_user_id)
    return material_to_response(material)


@router.post(
    "/{material_id}/activate",
    response_model=MaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def activate_material(
    project_id: str,
    material_id: str,
    actor_user_id: str = Depends(get_actor_user_id),
    catalog: MaterialCatalog = Depends(get_catalog),
) -> MaterialResponse:
    """Re-activate an archived material."""
    material = await catalog.activate_material(material_id, project_id, actor_user_id)
    return material_to_response(material)
