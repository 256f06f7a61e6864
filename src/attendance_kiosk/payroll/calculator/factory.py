from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import PayBasis
from ...core.exceptions import ValidationError
from .base import PayCalculator
from .daily_calculator import DailyPayCalculator
from .hourly_calculator import HourlyPayCalculator
from .monthly_calculator import MonthlyPayCalculator
from .weekly_calculator import WeeklyPayCalculator


@dataclass
class PayCalculatorFactory:
    """Factory Pattern: one calculator per pay basis."""

    def for_basis(self, basis: PayBasis) -> PayCalculator:
        if basis == PayBasis.MONTHLY:
            return MonthlyPayCalculator()
        if basis == PayBasis.DAILY:
            return DailyPayCalculator()
        if basis == PayBasis.HOURLY:
            return HourlyPayCalculator()
        if basis == PayBasis.WEEKLY:
            return WeeklyPayCalculator()
        raise ValidationError(f"Unsupported pay basis: {basis}")
