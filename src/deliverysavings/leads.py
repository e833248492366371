"""Lead capture records and contact validation."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .calculations import CalculationResults

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")
_PHONE_STRIP_RE = re.compile(r"[\s\-().]")
_LEADING_INT_RE = re.compile(r"^[+-]?\d+")


class LeadValidationError(ValueError):
    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{k}: {v}" for k, v in sorted(self.errors.items()))
        super().__init__(f"Invalid lead details ({detail})")


@dataclass(frozen=True)
class RestaurantInfo:
    name: str
    city: str


@dataclass(frozen=True)
class LeadData:
    restaurant_name: str
    city: str
    email: str
    calculated_savings: float
    timestamp: str
    phone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "restaurantName": self.restaurant_name,
            "city": self.city,
            "email": self.email,
            "calculatedSavings": self.calculated_savings,
            "timestamp": self.timestamp,
        }
        if self.phone is not None:
            data["phone"] = self.phone
        return data


def validate_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    cleaned = _PHONE_STRIP_RE.sub("", phone)
    return len(cleaned) >= 10 and bool(_PHONE_RE.match(cleaned))


@dataclass(frozen=True)
class EligibilityData:
    monthly_sales: int
    google_rating: float
    years_in_business: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthlySales": self.monthly_sales,
            "googleRating": self.google_rating,
            "yearsInBusiness": self.years_in_business,
        }


def _leading_int(text: str) -> Optional[int]:
    match = _LEADING_INT_RE.match(text.strip())
    return int(match.group(0)) if match else None


def validate_eligibility(
    monthly_sales: str, google_rating: str, years_in_business: str
) -> EligibilityData:
    """Check the add-on pre-qualification answers."""

    errors: Dict[str, str] = {}
    sales = _leading_int(monthly_sales.replace(",", "").lstrip("$ "))
    if not monthly_sales.strip():
        errors["monthly_sales"] = "Total monthly sales is required"
    elif sales is None or sales <= 0:
        errors["monthly_sales"] = "Please enter a valid amount"

    rating = None
    if not google_rating.strip():
        errors["google_rating"] = "Google review rating is required"
    else:
        try:
            rating = float(google_rating)
        except ValueError:
            rating = None
        if rating is None or not 0 <= rating <= 5:
            errors["google_rating"] = "Rating must be between 0 and 5"

    years = _leading_int(years_in_business)
    if not years_in_business.strip():
        errors["years_in_business"] = "Years in business is required"
    elif years is None or years < 0:
        errors["years_in_business"] = "Please enter a valid number"

    if errors:
        raise LeadValidationError(errors)
    return EligibilityData(sales, rating, years)


def build_lead(
    info: RestaurantInfo,
    email: str,
    results: CalculationResults,
    phone: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> LeadData:
    """Validate contact details and bundle them with the calculated savings."""

    errors: Dict[str, str] = {}
    name = info.name.strip()
    city = info.city.strip()
    email = email.strip()
    if not name:
        errors["restaurant_name"] = "Restaurant name is required"
    if not city:
        errors["city"] = "City is required"
    if not email:
        errors["email"] = "Email is required"
    elif not validate_email(email):
        errors["email"] = "Please enter a valid email address"
    if phone is not None:
        phone = phone.strip()
        if not validate_phone(phone):
            errors["phone"] = "Please enter a valid phone number"
    if errors:
        raise LeadValidationError(errors)

    return LeadData(
        restaurant_name=name,
        city=city,
        email=email,
        calculated_savings=results.savings_amount,
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        phone=phone,
    )


__all__ = [
    "EligibilityData",
    "LeadData",
    "LeadValidationError",
    "RestaurantInfo",
    "build_lead",
    "validate_eligibility",
    "validate_email",
    "validate_phone",
]
