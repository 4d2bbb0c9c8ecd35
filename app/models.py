"""
SQLAlchemy Database Models

Schema for the digital menu:
- Users authenticate with emailed one-time codes
- Sessions are opaque bearer tokens with a fixed 30-day lifetime
- Restaurants are owned by one user; categories and dishes hang off a restaurant
- Dish <-> Category tags live in the dish_categories join table
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Float,
    DateTime,
    Text,
    Boolean,
    Integer,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from app.database import Base


def new_id() -> str:
    """Opaque, non-sequential primary key."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    Identity anchor for restaurant owners.

    Created on the first verification-code request (or master-code login).
    Name and country may stay empty until the owner supplies them.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    email_verified = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    sessions = relationship("UserSession", back_populates="user")
    restaurants = relationship("Restaurant", back_populates="owner")

    def __repr__(self):
        return f"<User {self.email} verified={self.email_verified}>"


class EmailVerificationCode(Base):
    """
    Ephemeral 6-digit code proving ownership of an email address.

    At most one live code exists per email: issuing a new one deletes the
    previous codes. Deleted on successful verification.
    """
    __tablename__ = "email_verification_codes"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, index=True)
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User")

    def __repr__(self):
        return f"<EmailVerificationCode {self.email} expires={self.expires_at}>"


class UserSession(Base):
    """Authenticated session, resolved from the session_token cookie."""
    __tablename__ = "sessions"

    id = Column(String(32), primary_key=True, default=new_id)
    token = Column(String(128), nullable=False, unique=True, index=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="sessions")

    def __repr__(self):
        return f"<UserSession user={self.user_id} expires={self.expires_at}>"


class Restaurant(Base):
    """A restaurant and the root of its ownership chain."""
    __tablename__ = "restaurants"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    location = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    owner = relationship("User", back_populates="restaurants")
    categories = relationship("Category", back_populates="restaurant", order_by="Category.name")
    dishes = relationship("Dish", back_populates="restaurant", order_by="Dish.name")

    def __repr__(self):
        return f"<Restaurant {self.name} ({self.location})>"


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(32), primary_key=True, default=new_id)
    restaurant_id = Column(
        String(32), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    restaurant = relationship("Restaurant", back_populates="categories")
    dish_categories = relationship("DishCategory", back_populates="category")

    def __repr__(self):
        return f"<Category {self.name}>"


class Dish(Base):
    """
    Menu item.

    spice_level is 0..3 when set; price is positive when set. Category tags
    are replaced wholesale on update, never merged.
    """
    __tablename__ = "dishes"

    id = Column(String(32), primary_key=True, default=new_id)
    restaurant_id = Column(
        String(32), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String(500), nullable=True)
    is_vegetarian = Column(Boolean, nullable=False, default=True)
    spice_level = Column(Integer, nullable=True)
    price = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    restaurant = relationship("Restaurant", back_populates="dishes")
    dish_categories = relationship("DishCategory", back_populates="dish")

    @property
    def categories(self) -> list["Category"]:
        """Tagged categories, name order. Requires dish_categories to be loaded."""
        return sorted((dc.category for dc in self.dish_categories), key=lambda c: c.name)

    def __repr__(self):
        return f"<Dish {self.name}>"


class DishCategory(Base):
    """Join row tagging a dish with a category of the same restaurant."""
    __tablename__ = "dish_categories"
    __table_args__ = (UniqueConstraint("dish_id", "category_id", name="uq_dish_category"),)

    id = Column(String(32), primary_key=True, default=new_id)
    dish_id = Column(String(32), ForeignKey("dishes.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(
        String(32), ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True
    )

    dish = relationship("Dish", back_populates="dish_categories")
    category = relationship("Category", back_populates="dish_categories")

    def __repr__(self):
        return f"<DishCategory dish={self.dish_id} category={self.category_id}>"
