"""Scan domain models."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SoilCondition(str, Enum):
    """Categorical soil condition."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass
class Tree:
    """Tree domain model. Created once per scan, never updated."""
    id: str
    user_id: str
    tree_name: str
    growth_level: int
    humidity: int
    soil_condition: SoilCondition
    total_scans: int
    created_at: datetime
    updated_at: datetime


@dataclass
class Bonus:
    """A named reward bonus."""
    name: str
    amount: int


@dataclass
class ScanAnalysis:
    """Qualitative labels shown with a scan result."""
    growth_quality: str
    humidity_status: str
    soil_quality: str


@dataclass
class ScanMetrics:
    """Generated metrics and the reward derived from them."""
    growth: int
    humidity: int
    soil_condition: SoilCondition
    reward: int
    bonuses: list[Bonus]
    analysis: ScanAnalysis


@dataclass
class ScanResult:
    """What a completed scan returns to the caller."""
    tree: Tree
    reward: int
    bonuses: list[Bonus]
    message: str
    analysis: ScanAnalysis
