"""Package and add-on schemas."""

from pydantic import BaseModel
from typing import Any, List, Optional


class AddonResponse(BaseModel):
    """Schema for add-on response."""
    id: str
    name: str
    price_aud: Optional[float] = None
    unit: Optional[str] = None
    delivery: Optional[str] = None
    package_id: Optional[str] = None

    class Config:
        from_attributes = True


class AddonWithPackageResponse(AddonResponse):
    """Add-on with the name of the package it belongs to, if any."""
    package_name: Optional[str] = None

    @classmethod
    def from_addon(cls, addon) -> "AddonWithPackageResponse":
        data = AddonResponse.model_validate(addon).model_dump()
        data["package_name"] = addon.package.name if addon.package else None
        return cls(**data)


class PackageResponse(BaseModel):
    """Schema for package response, add-ons included."""
    id: str
    name: str
    ideal_for: Optional[str] = None
    # Free text or a list of inclusions, as given in packages.json.
    includes: Optional[Any] = None
    price_aud: Optional[float] = None
    image: Optional[str] = None
    addons: List[AddonResponse] = []

    class Config:
        from_attributes = True
