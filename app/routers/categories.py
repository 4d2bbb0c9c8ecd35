"""Category Endpoints (owner only)."""

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user, get_menu_service
from app.models import User
from app.schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ErrorResponse,
    SuccessResponse,
)
from app.services.menu import MenuService

router = APIRouter(responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})


@router.post("", response_model=CategoryResponse, status_code=201, summary="Create Category")
async def create_category(
    data: CategoryCreate,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> CategoryResponse:
    category = await menu.create_category(user.id, data.restaurant_id, data.name)
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse, summary="Rename Category")
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> CategoryResponse:
    category = await menu.update_category(user.id, category_id, data.name)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", response_model=SuccessResponse, summary="Delete Category")
async def delete_category(
    category_id: str,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> SuccessResponse:
    await menu.delete_category(user.id, category_id)
    return SuccessResponse()
