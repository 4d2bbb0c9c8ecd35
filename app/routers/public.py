"""Public Menu Endpoint. No authentication; this is what the QR code opens."""

from fastapi import APIRouter, Depends

from app.dependencies import get_menu_service
from app.schemas import ErrorResponse, PublicMenuResponse
from app.services.menu import MenuService

router = APIRouter()


@router.get(
    "/menu/{restaurant_id}",
    response_model=PublicMenuResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Public Menu",
)
async def get_public_menu(
    restaurant_id: str,
    menu: MenuService = Depends(get_menu_service),
) -> PublicMenuResponse:
    data = await menu.get_public_menu(restaurant_id)
    return PublicMenuResponse.model_validate(data, from_attributes=True)
