"""Pydantic models for API request bodies."""

from datetime import date

from pydantic import BaseModel, Field

from healmeal.domain.meals import MealType


class SignUpRequest(BaseModel):
    """Sign-up form payload."""

    email: str
    password: str
    name: str | None = None


class SignInRequest(BaseModel):
    """Sign-in form payload."""

    email: str
    password: str


class ProfileUpdate(BaseModel):
    """Profile form payload."""

    name: str = ""
    age: int = 0
    height: float = 0.0
    weight: float = 0.0
    gender: str = "other"
    conditions: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    dietary_preferences: list[str] = Field(default_factory=list)


class CartItemRequest(BaseModel):
    """Add-to-cart payload."""

    meal_id: str
    quantity: int = 1


class QuantityUpdate(BaseModel):
    """Cart quantity change payload."""

    quantity: int


class CheckoutRequest(BaseModel):
    """Checkout form payload."""

    delivery_address: str
    payment_method: str = "card"


class TrackerEntryRequest(BaseModel):
    """Manual meal tracker entry payload."""

    meal_id: str
    date: date
    meal_type: MealType
    notes: str | None = None
