"""
app/schemas/sync.py

Purpose: Bodies of the sync API

- Snapshot returned by GET /api/data
- Scalar config updates (budget, rankProfit)
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List

from utils.validation_utils import Number


class Snapshot(BaseModel):
    """
    Full application state in client shape.
    """
    users: List[Dict[str, Any]] = Field(default_factory=list)
    loans: List[Dict[str, Any]] = Field(default_factory=list)
    notifications: List[Dict[str, Any]] = Field(default_factory=list)
    budget: Number
    rankProfit: Number


class BudgetUpdate(BaseModel):
    budget: Number


class RankProfitUpdate(BaseModel):
    rankProfit: Number
