# stash/domain/schemas.py
from datetime import datetime
from typing import Annotated, List, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every payload: snake_case in python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# auth

class Credentials(CamelModel):
    email: EmailStr = Field(..., description="Please include a valid email")
    password: str = Field(..., min_length=6, description="Please enter a password with 6 or more characters")


class LoginIn(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenOut(CamelModel):
    token: str


class UserOut(CamelModel):
    """User as returned to clients, the password hash is never part of it."""

    id: str
    email: str
    roles: List[str]
    created_at: datetime


# products

Tag = Annotated[str, Field(min_length=1, max_length=100)]


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: int = Field(..., ge=0, description="Price in minor currency units (1500 = 15.00)")
    category: str | None = Field(None, max_length=100)
    tags: List[Tag] = Field(default_factory=list)


class ProductUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: int | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    tags: List[Tag] | None = None


class AssetIn(CamelModel):
    s3_asset_key: str = Field(..., min_length=1)


class PreviewIn(CamelModel):
    preview_image_key: str = Field(..., min_length=1)


class ProductOut(CamelModel):
    id: str
    artist_id: str
    name: str
    description: str | None = None
    price: int
    category: str | None = None
    tags: List[str]
    status: str
    preview_image_keys: List[str]
    s3_asset_key: str
    created_at: datetime
    updated_at: datetime
    version: int


class ProductPage(CamelModel):
    items: List[ProductOut]
    next_key: str | None = None


class MessageOut(CamelModel):
    msg: str


# cart

class CartItemIn(CamelModel):
    product_id: str = Field(..., min_length=1, max_length=255, description="Product ID is required")


class CartOut(CamelModel):
    user_id: str
    items: List[str]
    updated_at: datetime | None = None


# orders

class OrderItemOut(CamelModel):
    product_id: str
    name: str
    price: int


class OrderOut(CamelModel):
    id: str
    user_id: str
    items: List[OrderItemOut]
    total_amount: int
    status: str
    payment_intent_id: str | None = None
    created_at: datetime


# payments

class PaymentIntentIn(CamelModel):
    order_id: str = Field(..., min_length=1, description="Order ID is required")


class PaymentIntentOut(CamelModel):
    client_secret: str


class WebhookAck(CamelModel):
    received: bool = True


# uploads

class UploadUrlIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    file_type: str = Field(..., min_length=1)
    upload_type: Literal["asset", "preview"]


class UploadUrlOut(CamelModel):
    upload_url: str
    key: str
