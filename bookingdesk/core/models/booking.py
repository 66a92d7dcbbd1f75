import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from bookingdesk.core.types import Language


class CustomerAddress(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None


class ServiceSummary(BaseModel):
    name: str
    name_ar: str | None = None
    description: str | None = None

    def localized_name(self, language: Language) -> str:
        if language == "ar" and self.name_ar:
            return self.name_ar
        return self.name


class ProviderSummary(BaseModel):
    name: str
    name_ar: str | None = None
    rating: float | None = None
    phone: str | None = None

    def localized_name(self, language: Language) -> str:
        if language == "ar" and self.name_ar:
            return self.name_ar
        return self.name


class BookingDetails(BaseModel):
    id: str
    status: str
    payment_status: str
    scheduled_at: datetime
    total_amount: float
    currency: str
    customer_address: CustomerAddress = CustomerAddress()
    notes: str | None = None
    service: ServiceSummary
    provider: ProviderSummary

    @field_validator("customer_address", mode="before")
    @classmethod
    def parse_customer_address(cls, value: Any) -> Any:
        """The backend may send the address as a JSON string or as plain text."""
        if value is None:
            return {}
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
            except json.JSONDecodeError:
                return {"address": value}
            return parsed if isinstance(parsed, dict) else {"address": value}
        return value
