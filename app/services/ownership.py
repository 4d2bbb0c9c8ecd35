"""
Ownership Guard

Every restaurant-scoped operation starts here. A resource is returned only
when the restaurant at the top of its ownership chain
(Dish/Category -> Restaurant -> User) belongs to the caller. Missing and
foreign resources raise the same NotFoundError, so the response never
reveals that someone else's restaurant exists.

Nothing is cached: each operation re-checks the resource it touches.
"""

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.core.exceptions import BadRequestError, NotFoundError
from app.models import Category, Dish, Restaurant


async def get_owned_restaurant(db: AsyncSession, restaurant_id: str, user_id: str) -> Restaurant:
    result = await db.execute(select(Restaurant).where(Restaurant.id == restaurant_id))
    restaurant = result.scalar_one_or_none()

    if restaurant is None or restaurant.user_id != user_id:
        raise NotFoundError("Restaurant not found")
    return restaurant


async def get_owned_category(db: AsyncSession, category_id: str, user_id: str) -> Category:
    result = await db.execute(
        select(Category)
        .options(joinedload(Category.restaurant))
        .where(Category.id == category_id)
    )
    category = result.scalar_one_or_none()

    if category is None or category.restaurant.user_id != user_id:
        raise NotFoundError("Category not found")
    return category


async def get_owned_dish(db: AsyncSession, dish_id: str, user_id: str) -> Dish:
    result = await db.execute(
        select(Dish)
        .options(joinedload(Dish.restaurant))
        .where(Dish.id == dish_id)
    )
    dish = result.scalar_one_or_none()

    if dish is None or dish.restaurant.user_id != user_id:
        raise NotFoundError("Dish not found")
    return dish


async def ensure_categories_belong(
    db: AsyncSession,
    restaurant_id: str,
    category_ids: Iterable[str],
) -> list[str]:
    """
    Check that every id names a category of ``restaurant_id``.

    Returns the ids de-duplicated in their original order.
    """
    wanted = list(dict.fromkeys(category_ids))
    if not wanted:
        return wanted

    result = await db.execute(
        select(Category.id).where(
            Category.id.in_(wanted),
            Category.restaurant_id == restaurant_id,
        )
    )
    found = set(result.scalars().all())

    if len(found) != len(wanted):
        raise BadRequestError("Some categories not found or don't belong to this restaurant")
    return wanted
