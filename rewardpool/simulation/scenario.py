#!filepath: rewardpool/simulation/scenario.py
from __future__ import annotations

import os
from typing import Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from rewardpool.config.pool_config import PoolConfig
from rewardpool.utils.errors import UserInputError


class ScenarioStep(BaseModel):
    """
    One operation at ``at`` seconds after the pool opens.

    snapshot only records state; it needs no actor.
    """

    at: int = Field(..., ge=0)
    op: Literal["deposit", "withdraw", "claim", "snapshot"]
    actor: Optional[str] = None
    amount: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _actor_required(self) -> "ScenarioStep":
        if self.op != "snapshot" and not self.actor:
            raise ValueError(f"op={self.op} at={self.at} needs an actor")
        return self


class Scenario(BaseModel):
    """
    Scenario (FROZEN)

    Semantics:
      - a replayable sequence of pool operations on a deterministic clock
      - balances: staking tokens minted per actor before the first step
      - auto_fund: mint any shortfall right before a deposit
    """

    name: str = "scenario"
    pool: PoolConfig
    start_time: int = Field(0, ge=0)
    balances: Dict[str, int] = Field(default_factory=dict)
    auto_fund: bool = True
    steps: List[ScenarioStep] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _steps_in_time_order(self) -> "Scenario":
        last = 0
        for i, step in enumerate(self.steps):
            if step.at < last:
                raise ValueError(f"step {i} at={step.at} is earlier than the previous step at={last}")
            last = step.at
        return self

    @classmethod
    def load(cls, path: str) -> "Scenario":
        if not os.path.exists(path):
            raise UserInputError(f"Scenario file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)

        if not isinstance(raw, dict):
            raise UserInputError(f"Scenario file must hold a mapping: {path}")

        try:
            return cls(**raw)
        except ValidationError as e:
            raise UserInputError(f"Invalid scenario {path}:\n{e}") from e
