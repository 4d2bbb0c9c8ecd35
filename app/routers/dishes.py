"""
Dish Endpoints (owner only)

category_ids on create/update must all belong to the dish's restaurant;
on update they replace the dish's tags entirely.
"""

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user, get_menu_service
from app.models import User
from app.schemas import (
    DishCreate,
    DishResponse,
    DishUpdate,
    ErrorResponse,
    SuccessResponse,
)
from app.services.menu import MenuService

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)


@router.post("", response_model=DishResponse, status_code=201, summary="Create Dish")
async def create_dish(
    data: DishCreate,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> DishResponse:
    fields = data.model_dump(exclude={"restaurant_id", "category_ids"})
    if data.image is not None:
        fields["image"] = str(data.image)

    dish = await menu.create_dish(user.id, data.restaurant_id, fields, data.category_ids)
    return DishResponse.model_validate(dish)


@router.patch("/{dish_id}", response_model=DishResponse, summary="Update Dish")
async def update_dish(
    dish_id: str,
    data: DishUpdate,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> DishResponse:
    changes = data.model_dump(exclude_unset=True, exclude={"category_ids"})
    if changes.get("image") is not None:
        changes["image"] = str(data.image)

    dish = await menu.update_dish(user.id, dish_id, changes, data.category_ids)
    return DishResponse.model_validate(dish)


@router.delete("/{dish_id}", response_model=SuccessResponse, summary="Delete Dish")
async def delete_dish(
    dish_id: str,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> SuccessResponse:
    await menu.delete_dish(user.id, dish_id)
    return SuccessResponse()
