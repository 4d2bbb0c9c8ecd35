"""
Restaurant Endpoints (owner only)

Also serves the per-restaurant category and dish listings and the public
menu link that the admin UI turns into a QR code.
"""

from fastapi import APIRouter, Depends

from app.core.config import get_settings
from app.dependencies import get_current_user, get_menu_service
from app.models import User
from app.schemas import (
    CategoryResponse,
    DishResponse,
    ErrorResponse,
    MenuLinkResponse,
    RestaurantCreate,
    RestaurantResponse,
    RestaurantUpdate,
    SuccessResponse,
)
from app.services.menu import MenuService

router = APIRouter(responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})


@router.get("", response_model=list[RestaurantResponse], summary="List Restaurants")
async def list_restaurants(
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> list[RestaurantResponse]:
    restaurants = await menu.list_restaurants(user.id)
    return [RestaurantResponse.model_validate(r) for r in restaurants]


@router.post("", response_model=RestaurantResponse, status_code=201, summary="Create Restaurant")
async def create_restaurant(
    data: RestaurantCreate,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> RestaurantResponse:
    restaurant = await menu.create_restaurant(user.id, data.name, data.location)
    return RestaurantResponse.model_validate(restaurant)


@router.get("/{restaurant_id}", response_model=RestaurantResponse, summary="Get Restaurant")
async def get_restaurant(
    restaurant_id: str,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> RestaurantResponse:
    restaurant = await menu.get_restaurant(user.id, restaurant_id)
    return RestaurantResponse.model_validate(restaurant)


@router.patch("/{restaurant_id}", response_model=RestaurantResponse, summary="Update Restaurant")
async def update_restaurant(
    restaurant_id: str,
    data: RestaurantUpdate,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> RestaurantResponse:
    restaurant = await menu.update_restaurant(
        user.id, restaurant_id, data.model_dump(exclude_unset=True)
    )
    return RestaurantResponse.model_validate(restaurant)


@router.delete("/{restaurant_id}", response_model=SuccessResponse, summary="Delete Restaurant")
async def delete_restaurant(
    restaurant_id: str,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> SuccessResponse:
    await menu.delete_restaurant(user.id, restaurant_id)
    return SuccessResponse()


@router.get(
    "/{restaurant_id}/menu-link",
    response_model=MenuLinkResponse,
    summary="Public Menu Link (QR target)",
)
async def get_menu_link(
    restaurant_id: str,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> MenuLinkResponse:
    restaurant = await menu.get_restaurant(user.id, restaurant_id)
    return MenuLinkResponse(
        restaurant_id=restaurant.id,
        menu_url=f"{get_settings().app_base_url}/menu/{restaurant.id}",
    )


@router.get(
    "/{restaurant_id}/categories",
    response_model=list[CategoryResponse],
    summary="List Categories",
)
async def list_categories(
    restaurant_id: str,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> list[CategoryResponse]:
    categories = await menu.list_categories(user.id, restaurant_id)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get(
    "/{restaurant_id}/dishes",
    response_model=list[DishResponse],
    summary="List Dishes",
)
async def list_dishes(
    restaurant_id: str,
    user: User = Depends(get_current_user),
    menu: MenuService = Depends(get_menu_service),
) -> list[DishResponse]:
    dishes = await menu.list_dishes(user.id, restaurant_id)
    return [DishResponse.model_validate(d) for d in dishes]
