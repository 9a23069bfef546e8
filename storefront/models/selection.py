"""Selection, pricing and draft models for storefront checkout"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional


class ProductRef(BaseModel):
    """Product reference supplied by the catalog"""
    id: Optional[str] = None
    name: str
    image: str = ""
    price: float = Field(gt=0)


class SelectionItem(BaseModel):
    """What the shopper committed to buy"""
    product: ProductRef
    quantity: int = Field(default=1, ge=1)
    selected_color: Optional[str] = Field(default=None, alias="selectedColor")
    selected_size: Optional[str] = Field(default=None, alias="selectedSize")
    selected_type: Optional[str] = Field(default=None, alias="selectedType")

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def variant_labels(self) -> dict[str, str]:
        """Non-empty variant attributes, keyed for display"""
        labels = {
            "Type": self.selected_type,
            "Size": self.selected_size,
            "Color": self.selected_color,
        }
        return {key: value for key, value in labels.items() if value}


class PricingBreakdown(BaseModel):
    """Derived totals for a selection"""
    subtotal: float
    handling_fee: float = Field(alias="handlingFee")
    total: float

    class Config:
        populate_by_name = True
        frozen = True


class DraftProduct(BaseModel):
    """Product fields kept in a persisted draft"""
    name: str
    image: str = ""
    price: float = Field(gt=0)


class CheckoutDraft(BaseModel):
    """
    Pending guest checkout persisted across a page navigation.

    Serialized with the camelCase field names the checkout page reads.
    """
    product: DraftProduct
    quantity: int = Field(ge=1)
    selected_color: Optional[str] = Field(default=None, alias="selectedColor")
    selected_size: Optional[str] = Field(default=None, alias="selectedSize")
    selected_type: Optional[str] = Field(default=None, alias="selectedType")
    subtotal: float
    handling_fee: float = Field(alias="handlingFee")
    total: float

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def check_totals(self) -> "CheckoutDraft":
        if abs(self.subtotal + self.handling_fee - self.total) > 1e-6:
            raise ValueError("total does not equal subtotal + handlingFee")
        return self

    @classmethod
    def from_selection(
        cls,
        item: SelectionItem,
        breakdown: PricingBreakdown,
    ) -> "CheckoutDraft":
        """Build a draft from a selection and its breakdown"""
        return cls(
            product=DraftProduct(
                name=item.product.name,
                image=item.product.image,
                price=item.product.price,
            ),
            quantity=item.quantity,
            selected_color=item.selected_color,
            selected_size=item.selected_size,
            selected_type=item.selected_type,
            subtotal=breakdown.subtotal,
            handling_fee=breakdown.handling_fee,
            total=breakdown.total,
        )

    def to_selection(self) -> SelectionItem:
        """Rebuild the selection this draft was made from"""
        return SelectionItem(
            product=ProductRef(
                name=self.product.name,
                image=self.product.image,
                price=self.product.price,
            ),
            quantity=self.quantity,
            selected_color=self.selected_color,
            selected_size=self.selected_size,
            selected_type=self.selected_type,
        )

    @property
    def breakdown(self) -> PricingBreakdown:
        return PricingBreakdown(
            subtotal=self.subtotal,
            handling_fee=self.handling_fee,
            total=self.total,
        )
