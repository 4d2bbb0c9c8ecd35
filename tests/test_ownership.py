import pytest

from app.core.exceptions import BadRequestError, NotFoundError
from app.models import Category, Dish, Restaurant, User
from app.services.ownership import (
    ensure_categories_belong,
    get_owned_category,
    get_owned_dish,
    get_owned_restaurant,
)


@pytest.fixture
async def world(db):
    """Two owners, each with one restaurant holding one category and one dish."""
    alice = User(email="alice@example.com", name="Alice", country="India")
    bob = User(email="bob@example.com", name="Bob", country="Kenya")
    db.add_all([alice, bob])
    await db.flush()

    alice_restaurant = Restaurant(user_id=alice.id, name="Alice's", location="Pune")
    bob_restaurant = Restaurant(user_id=bob.id, name="Bob's", location="Nairobi")
    db.add_all([alice_restaurant, bob_restaurant])
    await db.flush()

    alice_category = Category(restaurant_id=alice_restaurant.id, name="Starters")
    alice_extra = Category(restaurant_id=alice_restaurant.id, name="Mains")
    bob_category = Category(restaurant_id=bob_restaurant.id, name="Grill")
    alice_dish = Dish(restaurant_id=alice_restaurant.id, name="Samosa", description="Fried")
    bob_dish = Dish(restaurant_id=bob_restaurant.id, name="Nyama", description="Grilled")
    db.add_all([alice_category, alice_extra, bob_category, alice_dish, bob_dish])
    await db.commit()

    return {
        "alice": alice,
        "bob": bob,
        "alice_restaurant": alice_restaurant,
        "bob_restaurant": bob_restaurant,
        "alice_category": alice_category,
        "alice_extra": alice_extra,
        "bob_category": bob_category,
        "alice_dish": alice_dish,
        "bob_dish": bob_dish,
    }


async def test_owner_gets_own_resources(db, world):
    alice = world["alice"]

    restaurant = await get_owned_restaurant(db, world["alice_restaurant"].id, alice.id)
    category = await get_owned_category(db, world["alice_category"].id, alice.id)
    dish = await get_owned_dish(db, world["alice_dish"].id, alice.id)

    assert restaurant.id == world["alice_restaurant"].id
    assert category.id == world["alice_category"].id
    assert dish.id == world["alice_dish"].id


async def test_foreign_and_missing_resources_look_the_same(db, world):
    alice = world["alice"]

    for resource_id in (world["bob_restaurant"].id, "does-not-exist"):
        with pytest.raises(NotFoundError, match="^Restaurant not found$"):
            await get_owned_restaurant(db, resource_id, alice.id)

    for resource_id in (world["bob_category"].id, "does-not-exist"):
        with pytest.raises(NotFoundError, match="^Category not found$"):
            await get_owned_category(db, resource_id, alice.id)

    for resource_id in (world["bob_dish"].id, "does-not-exist"):
        with pytest.raises(NotFoundError, match="^Dish not found$"):
            await get_owned_dish(db, resource_id, alice.id)


async def test_categories_of_the_restaurant_are_accepted(db, world):
    ids = [world["alice_category"].id, world["alice_extra"].id, world["alice_category"].id]

    accepted = await ensure_categories_belong(db, world["alice_restaurant"].id, ids)

    assert accepted == [world["alice_category"].id, world["alice_extra"].id]


async def test_empty_category_list_is_accepted(db, world):
    assert await ensure_categories_belong(db, world["alice_restaurant"].id, []) == []


@pytest.mark.parametrize("foreign", ["bob_category", None])
async def test_foreign_or_unknown_category_is_rejected(db, world, foreign):
    other = world[foreign].id if foreign else "does-not-exist"

    with pytest.raises(BadRequestError, match="don't belong to this restaurant"):
        await ensure_categories_belong(
            db, world["alice_restaurant"].id, [world["alice_category"].id, other]
        )
