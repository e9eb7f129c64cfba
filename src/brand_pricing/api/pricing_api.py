"""
Pricing API - FastAPI router for brands and prices.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, model_validator

from ..engine.models import PriceRule
from ..services.pricing_service import PricingService
from .state import get_service

router = APIRouter(prefix="/api/v1", tags=["pricing"])


# Pydantic models for API
class AddBrandRequest(BaseModel):
    """Request model for registering a brand."""
    name: str = Field(min_length=1, max_length=255)


class BrandResponse(BaseModel):
    """Response model for a brand."""
    id: int
    name: str


class PriceRuleModel(BaseModel):
    """A price rule as submitted by clients. Dates without an offset are read as UTC."""
    brand_id: int
    start_date: datetime
    end_date: datetime
    product_id: int
    priority: int = 0
    price: int = Field(description="Amount in minor currency units, e.g. cents")
    curr: str = Field(pattern=r"^[A-Z]{3}$")

    @model_validator(mode="after")
    def check_window(self):
        rule = self.to_rule()
        if rule.start_date > rule.end_date:
            raise ValueError("start_date must not be after end_date")
        return self

    def to_rule(self) -> PriceRule:
        return PriceRule(
            brand_id=self.brand_id,
            product_id=self.product_id,
            start_date=self.start_date,
            end_date=self.end_date,
            priority=self.priority,
            price=self.price,
            currency=self.curr,
        )


class GetPriceResponse(BaseModel):
    """Response model for a resolved price."""
    brand_id: int
    product_id: int
    price: str
    curr: str
    start_date: str
    end_date: str
    string_id: str


# Endpoints

@router.get("/brands", response_model=BrandResponse)
def get_brand(name: Optional[str] = None, service: PricingService = Depends(get_service)):
    """Look up a brand by name."""
    if not name:
        raise HTTPException(status_code=400, detail="Query parameter 'name' is required")
    brand = service.get_brand(name)
    return BrandResponse(id=brand.id, name=brand.name)


@router.post("/brands", response_model=BrandResponse, status_code=status.HTTP_201_CREATED)
def add_brand(request: AddBrandRequest, service: PricingService = Depends(get_service)):
    """Register a new brand."""
    service.add_brand(request.name)
    brand = service.get_brand(request.name)
    return BrandResponse(id=brand.id, name=brand.name)


@router.get("/prices", response_model=GetPriceResponse)
def get_price(
    brand_id: int,
    product_id: int,
    date: datetime,
    string_id: str,
    service: PricingService = Depends(get_service)
):
    """Resolve the price that applies to a product at an RFC 3339 instant."""
    price = service.get_price(brand_id, product_id, date)
    return GetPriceResponse(
        brand_id=price.brand_id,
        product_id=price.product_id,
        price=price.display_price,
        curr=price.currency,
        start_date=price.start_date.isoformat(),
        end_date=price.end_date.isoformat(),
        string_id=string_id,
    )


@router.post("/prices", response_model=PriceRuleModel, status_code=status.HTTP_201_CREATED)
def add_price(request: PriceRuleModel, service: PricingService = Depends(get_service)):
    """Add a price rule."""
    service.add_price(request.to_rule())
    return request
