"""Pricing endpoints: single-date price, availability calendar, quote estimates."""

import logging
from datetime import date
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from apps.api.deps import get_pricing_service
from domain.errors import (
    HallNotFoundError,
    InvalidDateRangeError,
    PricingDataFetchError,
    PricingError,
    UnknownServiceError,
)
from domain.models import DayDisplayState, PriceBreakdown, PricingRule, QuoteEstimate
from services.pricing_service import PricingService
from services.rule_validation import validate_pricing_rule


logger = logging.getLogger(__name__)

router = APIRouter(tags=["pricing"])


class QuoteRequest(BaseModel):
    """Request body for a quote estimate."""

    date: date
    service_ids: List[str] = Field(default_factory=list)


class ValidationIssueResponse(BaseModel):
    code: str
    severity: str
    message: str
    field: str | None = None


class RuleValidationResponse(BaseModel):
    """Validation outcome for a pricing rule."""

    is_valid: bool
    issues: List[ValidationIssueResponse]


def _raise_http(error: PricingError) -> None:
    """Map a domain error to an HTTP error."""
    if isinstance(error, HallNotFoundError):
        status_code = 404
    elif isinstance(error, (InvalidDateRangeError, UnknownServiceError)):
        status_code = 422
    elif isinstance(error, PricingDataFetchError):
        logger.error(f"Pricing data unavailable: {error}")
        status_code = 503
    else:
        status_code = 500
    raise HTTPException(
        status_code=status_code,
        detail={"code": error.code, "message": error.message},
    ) from error


@router.get("/halls/{hall_id}/price", response_model=PriceBreakdown)
async def get_price(
    hall_id: str,
    target_date: date = Query(..., alias="date", description="Date to price (YYYY-MM-DD)"),
    service: PricingService = Depends(get_pricing_service),
):
    """
    Resolve the price of a hall on a date.

    Args:
        hall_id: Hall ID
        target_date: Date to price
        service: Pricing service

    Returns:
        PriceBreakdown: Base price, final price and what was applied
    """
    try:
        return await service.quote(hall_id, target_date)
    except PricingError as e:
        _raise_http(e)


@router.get("/halls/{hall_id}/calendar", response_model=Dict[str, DayDisplayState])
async def get_calendar(
    hall_id: str,
    start: date = Query(..., description="First day (inclusive)"),
    end: date = Query(..., description="Last day (inclusive)"),
    service: PricingService = Depends(get_pricing_service),
):
    """
    Availability calendar with prices for a date range.

    Booked and maintenance days are returned without a price.
    """
    try:
        return await service.calendar(hall_id, start, end)
    except PricingError as e:
        _raise_http(e)


@router.post("/halls/{hall_id}/quote", response_model=QuoteEstimate)
async def create_quote(
    hall_id: str,
    request: QuoteRequest,
    service: PricingService = Depends(get_pricing_service),
):
    """Non-binding estimate for a date plus selected add-on services."""
    try:
        return await service.estimate(hall_id, request.date, request.service_ids)
    except PricingError as e:
        _raise_http(e)


@router.post("/pricing-rules/validate", response_model=RuleValidationResponse)
async def validate_rule(rule: PricingRule):
    """Check a pricing rule for authoring mistakes before it is saved."""
    result = validate_pricing_rule(rule)
    issues = [
        ValidationIssueResponse(
            code=issue.code,
            severity=issue.severity.value,
            message=issue.message,
            field=issue.field,
        )
        for issue in result.errors + result.warnings + result.notes
    ]
    return RuleValidationResponse(is_valid=result.is_valid, issues=issues)
