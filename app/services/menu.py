"""
Menu Management Service

Owner-scoped CRUD for restaurants, categories and dishes, plus the public
menu read used by diners. Every owner operation passes through the
ownership guard first. Mutations that touch several tables (a dish and its
category tags, cascading deletes) commit once, so a failure leaves nothing
half-written.
"""

import logging
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from app.core.exceptions import NotFoundError
from app.models import Category, Dish, DishCategory, Restaurant
from app.services.ownership import (
    ensure_categories_belong,
    get_owned_category,
    get_owned_dish,
    get_owned_restaurant,
)

logger = logging.getLogger(__name__)


def _with_categories(query):
    return query.options(
        selectinload(Dish.dish_categories).joinedload(DishCategory.category)
    )


class MenuService:
    """Restaurant, category and dish operations for one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # =========================================================================
    # RESTAURANTS
    # =========================================================================

    async def list_restaurants(self, user_id: str) -> list[Restaurant]:
        result = await self.db.execute(
            select(Restaurant)
            .where(Restaurant.user_id == user_id)
            .order_by(Restaurant.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_restaurant(self, user_id: str, restaurant_id: str) -> Restaurant:
        return await get_owned_restaurant(self.db, restaurant_id, user_id)

    async def create_restaurant(self, user_id: str, name: str, location: str) -> Restaurant:
        restaurant = Restaurant(user_id=user_id, name=name, location=location)
        self.db.add(restaurant)
        await self.db.commit()
        logger.info(f"Restaurant {restaurant.id} created by user {user_id}")
        return restaurant

    async def update_restaurant(
        self,
        user_id: str,
        restaurant_id: str,
        changes: dict[str, Any],
    ) -> Restaurant:
        restaurant = await get_owned_restaurant(self.db, restaurant_id, user_id)
        for field, value in changes.items():
            setattr(restaurant, field, value)
        await self.db.commit()
        return restaurant

    async def delete_restaurant(self, user_id: str, restaurant_id: str) -> None:
        """Delete a restaurant together with its categories, dishes and tags."""
        await get_owned_restaurant(self.db, restaurant_id, user_id)

        dish_ids = select(Dish.id).where(Dish.restaurant_id == restaurant_id)
        await self.db.execute(delete(DishCategory).where(DishCategory.dish_id.in_(dish_ids)))
        await self.db.execute(delete(Dish).where(Dish.restaurant_id == restaurant_id))
        await self.db.execute(delete(Category).where(Category.restaurant_id == restaurant_id))
        await self.db.execute(delete(Restaurant).where(Restaurant.id == restaurant_id))
        await self.db.commit()
        logger.info(f"Restaurant {restaurant_id} deleted by user {user_id}")

    # =========================================================================
    # CATEGORIES
    # =========================================================================

    async def list_categories(self, user_id: str, restaurant_id: str) -> list[Category]:
        await get_owned_restaurant(self.db, restaurant_id, user_id)
        result = await self.db.execute(
            select(Category)
            .where(Category.restaurant_id == restaurant_id)
            .order_by(Category.name.asc())
        )
        return list(result.scalars().all())

    async def create_category(self, user_id: str, restaurant_id: str, name: str) -> Category:
        await get_owned_restaurant(self.db, restaurant_id, user_id)
        category = Category(restaurant_id=restaurant_id, name=name)
        self.db.add(category)
        await self.db.commit()
        return category

    async def update_category(self, user_id: str, category_id: str, name: str) -> Category:
        category = await get_owned_category(self.db, category_id, user_id)
        category.name = name
        await self.db.commit()
        return category

    async def delete_category(self, user_id: str, category_id: str) -> None:
        """Delete a category; dishes lose the tag but are kept."""
        await get_owned_category(self.db, category_id, user_id)
        await self.db.execute(delete(DishCategory).where(DishCategory.category_id == category_id))
        await self.db.execute(delete(Category).where(Category.id == category_id))
        await self.db.commit()

    # =========================================================================
    # DISHES
    # =========================================================================

    async def _load_dish(self, dish_id: str) -> Dish:
        result = await self.db.execute(
            _with_categories(select(Dish))
            .where(Dish.id == dish_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def list_dishes(self, user_id: str, restaurant_id: str) -> list[Dish]:
        await get_owned_restaurant(self.db, restaurant_id, user_id)
        result = await self.db.execute(
            _with_categories(select(Dish))
            .where(Dish.restaurant_id == restaurant_id)
            .order_by(Dish.created_at.desc())
        )
        return list(result.scalars().all())

    async def create_dish(
        self,
        user_id: str,
        restaurant_id: str,
        fields: dict[str, Any],
        category_ids: Optional[list[str]] = None,
    ) -> Dish:
        await get_owned_restaurant(self.db, restaurant_id, user_id)
        category_ids = await ensure_categories_belong(self.db, restaurant_id, category_ids or [])

        dish = Dish(restaurant_id=restaurant_id, **fields)
        self.db.add(dish)
        await self.db.flush()

        for category_id in category_ids:
            self.db.add(DishCategory(dish_id=dish.id, category_id=category_id))

        await self.db.commit()
        logger.info(f"Dish {dish.id} created in restaurant {restaurant_id}")
        return await self._load_dish(dish.id)

    async def update_dish(
        self,
        user_id: str,
        dish_id: str,
        changes: dict[str, Any],
        category_ids: Optional[list[str]] = None,
    ) -> Dish:
        """
        Apply ``changes`` to the dish. When ``category_ids`` is not None the
        dish's tags are replaced by exactly that set (an empty list clears them).
        """
        dish = await get_owned_dish(self.db, dish_id, user_id)

        if category_ids is not None:
            category_ids = await ensure_categories_belong(self.db, dish.restaurant_id, category_ids)
            await self.db.execute(delete(DishCategory).where(DishCategory.dish_id == dish_id))
            for category_id in category_ids:
                self.db.add(DishCategory(dish_id=dish_id, category_id=category_id))

        for field, value in changes.items():
            setattr(dish, field, value)

        await self.db.commit()
        return await self._load_dish(dish_id)

    async def delete_dish(self, user_id: str, dish_id: str) -> None:
        await get_owned_dish(self.db, dish_id, user_id)
        await self.db.execute(delete(DishCategory).where(DishCategory.dish_id == dish_id))
        await self.db.execute(delete(Dish).where(Dish.id == dish_id))
        await self.db.commit()

    # =========================================================================
    # PUBLIC MENU
    # =========================================================================

    async def get_public_menu(self, restaurant_id: str) -> dict[str, Any]:
        """
        Menu for diners, no authentication.

        Categories are in name order, each with its dishes in name order;
        ``all_dishes`` also includes untagged dishes.
        """
        result = await self.db.execute(
            select(Restaurant).where(Restaurant.id == restaurant_id)
        )
        restaurant = result.scalar_one_or_none()
        if restaurant is None:
            raise NotFoundError("Restaurant not found")

        categories = (
            await self.db.execute(
                select(Category)
                .where(Category.restaurant_id == restaurant_id)
                .order_by(Category.name.asc())
            )
        ).scalars().all()

        dishes = (
            await self.db.execute(
                _with_categories(select(Dish))
                .where(Dish.restaurant_id == restaurant_id)
                .order_by(Dish.name.asc())
            )
        ).scalars().all()

        by_category: dict[str, list[Dish]] = {category.id: [] for category in categories}
        for dish in dishes:
            for link in dish.dish_categories:
                by_category[link.category_id].append(dish)

        return {
            "restaurant": {
                "id": restaurant.id,
                "name": restaurant.name,
                "location": restaurant.location,
            },
            "categories": [
                {"id": category.id, "name": category.name, "dishes": by_category[category.id]}
                for category in categories
            ],
            "all_dishes": list(dishes),
        }
