"""Pydantic models for the unified storefront entities."""

from typing import Optional, List, Dict, Any, Union
from pydantic import BaseModel, Field, ConfigDict, ValidationInfo, field_validator


class StorefrontModel(BaseModel):
    """
    Value object; unknown upstream fields are carried along.

    Instances are frozen, but the freeze is shallow: dict and list values
    (``merchandise``, ``selectedOptions``, pass-through extras) are the
    containers the upstream sent and are not copied.

    An explicit upstream ``null`` for a field that has a default takes that
    default (``[]``, ``{}``, ``0`` ...), and null list entries are dropped.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        if isinstance(value, list):
            return [item for item in value if item is not None]
        return value


class Money(StorefrontModel):
    """An amount in a currency."""
    amount: Optional[str] = None
    currency_code: Optional[str] = Field(None, alias="currencyCode")


class Image(StorefrontModel):
    """Product image."""
    url: Optional[str] = None
    alt_text: Optional[str] = Field(None, alias="altText")
    width: Optional[int] = None
    height: Optional[int] = None
    is_default: Optional[bool] = Field(None, alias="isDefault")


class SEO(StorefrontModel):
    title: Optional[str] = None
    description: Optional[str] = None


class CartLine(StorefrontModel):
    """A single line of a cart."""
    id: Optional[Union[str, int]] = None
    quantity: int = 0
    merchandise: Dict[str, Any] = Field(default_factory=dict)
    cost: Optional[Dict[str, Any]] = None


class CartCost(StorefrontModel):
    subtotal_amount: Optional[Money] = Field(None, alias="subtotalAmount")
    total_amount: Optional[Money] = Field(None, alias="totalAmount")
    total_tax_amount: Money = Field(alias="totalTaxAmount")


class Cart(StorefrontModel):
    """Normalized cart."""
    id: Optional[str] = None
    checkout_url: Optional[str] = Field(None, alias="checkoutUrl")
    lines: List[CartLine] = Field(default_factory=list)
    cost: CartCost
    total_quantity: Optional[int] = Field(None, alias="totalQuantity")


class ProductOption(StorefrontModel):
    id: Optional[Union[str, int]] = None
    name: Optional[str] = None
    values: List[str] = Field(default_factory=list)


class ProductVariant(StorefrontModel):
    """Product variant."""
    id: Optional[Union[str, int]] = None
    title: Optional[str] = None
    available_for_sale: Optional[bool] = Field(None, alias="availableForSale")
    selected_options: List[Dict[str, Any]] = Field(default_factory=list, alias="selectedOptions")
    price: Optional[Union[Money, str]] = None
    compare_at_price: Optional[Union[Money, str]] = Field(None, alias="compareAtPrice")


class PriceRange(StorefrontModel):
    min_variant_price: Money = Field(default_factory=Money, alias="minVariantPrice")
    max_variant_price: Money = Field(default_factory=Money, alias="maxVariantPrice")


class Product(StorefrontModel):
    """Normalized product."""
    id: Optional[Union[str, int]] = None
    handle: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    description_html: Optional[str] = Field(None, alias="descriptionHtml")
    vendor: Optional[str] = None
    product_type: Optional[str] = Field(None, alias="productType")
    options: List[ProductOption] = Field(default_factory=list)
    variants: List[ProductVariant] = Field(default_factory=list)
    images: List[Image] = Field(default_factory=list)
    featured_image: Optional[Image] = Field(None, alias="featuredImage")
    price_range: Optional[PriceRange] = Field(None, alias="priceRange")
    seo: Optional[SEO] = None
    tags: List[str] = Field(default_factory=list)
    updated_at: Optional[str] = Field(None, alias="updatedAt")


class Collection(StorefrontModel):
    """Normalized collection with its browsing path."""
    handle: str
    title: Optional[str] = None
    description: Optional[str] = None
    seo: Optional[SEO] = None
    path: str
    updated_at: Optional[str] = Field(None, alias="updatedAt")


class Menu(StorefrontModel):
    """Navigation entry."""
    id: Optional[Union[str, int]] = None
    title: Optional[str] = None
    path: Optional[str] = None


class Page(StorefrontModel):
    """Content page; passed through as received."""
    id: Optional[Union[str, int]] = None
    handle: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    body_summary: Optional[str] = Field(None, alias="bodySummary")
    seo: Optional[SEO] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")
