# cyberguard/models/schemas.py
from __future__ import annotations

from enum import Enum
from typing import Annotated, List, Optional
from pydantic import AfterValidator, BaseModel, Field


class AssetType(str, Enum):
    HARDWARE = "Hardware"
    SOFTWARE = "Software"
    INFORMATION = "Information"
    PERSONNEL = "Personnel"


class WeaknessSeverity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


# Kategori yang ditampilkan di halaman aset → tipe aset di registry
DISPLAY_CATEGORIES: dict[str, AssetType] = {
    "Hardware": AssetType.HARDWARE,
    "Software": AssetType.SOFTWARE,
    "Information resources": AssetType.INFORMATION,
}


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value.strip()


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


# ====================================
# Weakness
# ====================================
class WeaknessIn(BaseModel):
    description: NonBlankStr
    severity: WeaknessSeverity = WeaknessSeverity.MEDIUM


class WeaknessUpdate(BaseModel):
    description: Optional[NonBlankStr] = None
    severity: Optional[WeaknessSeverity] = None


class WeaknessOut(BaseModel):
    id: int
    asset_id: int
    description: str
    severity: WeaknessSeverity


# ====================================
# Asset
# ====================================
class AssetIn(BaseModel):
    name: NonBlankStr
    type: AssetType
    description: NonBlankStr


class AssetUpdate(BaseModel):
    name: Optional[NonBlankStr] = None
    type: Optional[AssetType] = None
    description: Optional[NonBlankStr] = None


class AssetOut(BaseModel):
    id: int
    name: str
    type: AssetType
    description: str
    weaknesses: List[WeaknessOut] = Field(default_factory=list)
