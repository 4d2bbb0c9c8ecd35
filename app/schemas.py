"""
Pydantic Schemas for Request/Response Validation

Request bodies enforce the admin input rules (non-empty strings, valid
image URL, spice level 0..3, positive price) before any ownership check
runs. Response models read straight from ORM objects.
"""

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, EmailStr, field_validator
from typing import Optional, List
from datetime import datetime


MAX_SPICE_LEVEL = 3


# =============================================================================
# AUTH SCHEMAS
# =============================================================================

class SendCodeRequest(BaseModel):
    """
    Request a verification code; name/country register a new owner.

    EmailStr lowercases the domain and keeps the local part as typed, so
    "Owner@Example.COM" is stored and looked up as "Owner@example.com".
    """
    email: EmailStr = Field(..., examples=["owner@example.com"])
    name: Optional[str] = Field(None, min_length=1, max_length=100, examples=["Jane Doe"])
    country: Optional[str] = Field(None, min_length=1, max_length=100, examples=["India"])


class VerifyCodeRequest(BaseModel):
    """
    Verify an emailed code. Any length is accepted here so a master code can pass.

    The email is normalized the same way as in SendCodeRequest.
    """
    email: EmailStr
    code: str = Field(..., min_length=1, max_length=128, examples=["123456"])


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: Optional[str]
    country: Optional[str]
    email_verified: bool


class AuthResponse(BaseModel):
    """Returned after a successful verification; the token is also set as a cookie."""
    user: UserResponse
    token: str


class SessionResponse(BaseModel):
    user: UserResponse


class SuccessResponse(BaseModel):
    success: bool = True


# =============================================================================
# RESTAURANT SCHEMAS
# =============================================================================

class RestaurantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, examples=["Spice Route"])
    location: str = Field(..., min_length=1, max_length=255, examples=["MG Road, Bengaluru"])


class RestaurantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    location: Optional[str] = Field(None, min_length=1, max_length=255)

    @field_validator("name", "location")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class RestaurantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    location: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class MenuLinkResponse(BaseModel):
    """Public menu URL for a restaurant, the payload encoded into its QR code."""
    restaurant_id: str
    menu_url: str


# =============================================================================
# CATEGORY SCHEMAS
# =============================================================================

class CategoryCreate(BaseModel):
    restaurant_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100, examples=["Starters"])


class CategoryUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    name: str


class CategoryTag(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


# =============================================================================
# DISH SCHEMAS
# =============================================================================

class DishCreate(BaseModel):
    restaurant_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200, examples=["Paneer Tikka"])
    description: str = Field(..., min_length=1, examples=["Char-grilled cottage cheese"])
    image: Optional[HttpUrl] = Field(None, examples=["https://cdn.example.com/paneer.jpg"])
    is_vegetarian: bool = True
    spice_level: Optional[int] = Field(None, ge=0, le=MAX_SPICE_LEVEL)
    price: Optional[float] = Field(None, gt=0, examples=[249.0])
    category_ids: Optional[List[str]] = None


class DishUpdate(BaseModel):
    """
    Partial dish update.

    Omitted fields are left alone. An explicit null clears image,
    spice_level or price. category_ids, when present, replaces every tag.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    image: Optional[HttpUrl] = None
    is_vegetarian: Optional[bool] = None
    spice_level: Optional[int] = Field(None, ge=0, le=MAX_SPICE_LEVEL)
    price: Optional[float] = Field(None, gt=0)
    category_ids: Optional[List[str]] = None

    @field_validator("name", "description", "is_vegetarian", "category_ids")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class DishResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    name: str
    description: str
    image: Optional[str]
    is_vegetarian: bool
    spice_level: Optional[int]
    price: Optional[float]
    categories: List[CategoryTag] = []


# =============================================================================
# PUBLIC MENU SCHEMAS
# =============================================================================

class PublicRestaurant(BaseModel):
    id: str
    name: str
    location: str


class PublicCategory(BaseModel):
    id: str
    name: str
    dishes: List[DishResponse]


class PublicMenuResponse(BaseModel):
    restaurant: PublicRestaurant
    categories: List[PublicCategory]
    all_dishes: List[DishResponse]


# =============================================================================
# SYSTEM SCHEMAS
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    redis: str
    email_service: str
    timestamp: datetime
