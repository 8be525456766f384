"""
app/schemas/impact.py

Request/response schemas for the impact calculator endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class CalculateImpactRequest(CamelModel):
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Donation amount in dollars")


class LogDonationRequest(CamelModel):
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    email: str | None = Field(default=None, max_length=320)
    timestamp: datetime | None = None


class CalculateVolunteerImpactRequest(CamelModel):
    hours: float = Field(..., ge=0, allow_inf_nan=False)


class DonationImpactResponse(CamelModel):
    meals_provided: int
    people_served: int
    people_percentage: float
    food_rescued: int
    co2_saved: int
    water_saved: int
    produce_percentage: float
    dairy_percentage: float
    protein_percentage: float
    fresh_food_percentage: float
    baby_elephants: str
    bison: str
    cars: str
    people_fed: str
    days_fed: str
    weight_comparison: str
    house_cats: str
    golden_retrievers: str
    grizzly_bears: str
    hippos: str
    school_buses: str
    small_jets: str


class VolunteerImpactResponse(CamelModel):
    hours_worked: float
    meals_provided: int
    cost_savings: float
    people_served_per_day: int


class ImpactEnvelope(CamelModel):
    impact: DonationImpactResponse


class VolunteerImpactEnvelope(CamelModel):
    impact: VolunteerImpactResponse


class DonationResponse(CamelModel):
    id: int
    amount: float
    timestamp: datetime
    email: str
    donor_id: int | None = None
    external_donation_id: str | None = None
    imported: int = 0


class DonationEnvelope(CamelModel):
    donation: DonationResponse


class FoodDistributionResponse(CamelModel):
    produce: float
    dairy: float
    protein: float
    fresh_food: float


class AlmanacResponse(CamelModel):
    meals_per_dollar: float
    people_per_meal: float
    food_rescue_per_dollar: float
    co2_per_pound_food: float
    water_per_pound_food: float
    food_distribution: FoodDistributionResponse
    total_meals_provided: int
    total_people_served: int


class AlmanacEnvelope(CamelModel):
    data: AlmanacResponse
