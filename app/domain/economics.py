"""
Economic Calculator Domain Service
==================================
Cost and return figures for irrigation and crop production.

All calculations are pure arithmetic over the caller's inputs. Inputs that
would divide by zero are rejected with a ValidationError instead of
producing infinities.

Usage:
    calculator = EconomicCalculator()
    cost = calculator.irrigation_cost(water_volume=120, electricity_rate=0.2, labor_cost=15)
"""

import logging
from dataclasses import dataclass
from typing import Any

from app.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_WATER_PRICE_PER_M3 = 0.15
DEFAULT_PUMP_KWH_PER_M3 = 0.1


@dataclass
class IrrigationCost:
    """Cost breakdown of one irrigation run."""

    water_cost: float
    electricity_cost: float
    labor_cost: float
    total_cost: float

    @property
    def cost_per_hectare(self) -> float:
        # Inputs are already expressed per hectare.
        return self.total_cost

    def to_dict(self) -> dict[str, Any]:
        return {
            "waterCost": self.water_cost,
            "electricityCost": self.electricity_cost,
            "laborCost": self.labor_cost,
            "totalCost": self.total_cost,
            "costPerHectare": self.cost_per_hectare,
        }


@dataclass
class ReturnOnInvestment:
    """Return of an investment that raises yield."""

    additional_revenue: float
    net_profit: float
    roi_percent: float
    payback_period: float | None  # None when the investment never pays back

    def to_dict(self) -> dict[str, Any]:
        return {
            "additionalRevenue": self.additional_revenue,
            "netProfit": self.net_profit,
            "roi": self.roi_percent,
            "paybackPeriod": self.payback_period,
        }


@dataclass
class ProductionCost:
    """Unit production cost of a harvest."""

    total_cost: float
    cost_per_kg: float
    operational_costs: float
    fixed_costs: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCost": self.total_cost,
            "costPerKg": self.cost_per_kg,
            "operationalCosts": self.operational_costs,
            "fixedCosts": self.fixed_costs,
        }


def _require_non_negative(**values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValidationError(f"{name} must not be negative", detail={name: value})


class EconomicCalculator:
    """
    Irrigation cost, ROI and production cost calculator.

    Args:
        water_price_per_m3: Price of one cubic metre of water
        pump_kwh_per_m3: Pump energy needed per cubic metre
    """

    def __init__(
        self,
        water_price_per_m3: float = DEFAULT_WATER_PRICE_PER_M3,
        pump_kwh_per_m3: float = DEFAULT_PUMP_KWH_PER_M3,
    ):
        self.water_price_per_m3 = water_price_per_m3
        self.pump_kwh_per_m3 = pump_kwh_per_m3

    def irrigation_cost(self, water_volume: float, electricity_rate: float, labor_cost: float) -> IrrigationCost:
        """
        Cost of pumping ``water_volume`` cubic metres.

        Args:
            water_volume: Water applied (m³)
            electricity_rate: Price per kWh
            labor_cost: Labor cost of the run
        """
        _require_non_negative(water_volume=water_volume, electricity_rate=electricity_rate, labor_cost=labor_cost)

        water_cost = water_volume * self.water_price_per_m3
        electricity_cost = water_volume * self.pump_kwh_per_m3 * electricity_rate
        return IrrigationCost(
            water_cost=water_cost,
            electricity_cost=electricity_cost,
            labor_cost=labor_cost,
            total_cost=water_cost + electricity_cost + labor_cost,
        )

    def roi(
        self,
        initial_investment: float,
        yield_increase: float,
        product_price: float,
        operational_costs: float,
    ) -> ReturnOnInvestment:
        """
        Return on an investment that raises yield.

        Raises:
            ValidationError: If initial_investment is not positive
        """
        if initial_investment <= 0:
            raise ValidationError(
                "initial_investment must be greater than zero",
                detail={"initial_investment": initial_investment},
            )

        additional_revenue = yield_increase * product_price
        net_profit = additional_revenue - operational_costs
        payback = initial_investment / net_profit if net_profit > 0 else None
        if payback is None:
            logger.debug("Investment of %s never pays back (net profit %s)", initial_investment, net_profit)

        return ReturnOnInvestment(
            additional_revenue=additional_revenue,
            net_profit=net_profit,
            roi_percent=round(net_profit / initial_investment * 100, 2),
            payback_period=payback,
        )

    def production_cost(
        self,
        operational_costs: float,
        yield_amount: float,
        fixed_costs: float = 0.0,
    ) -> ProductionCost:
        """
        Production cost per kilogram of yield.

        Raises:
            ValidationError: If yield_amount is not positive
        """
        if yield_amount <= 0:
            raise ValidationError("yield_amount must be greater than zero", detail={"yield_amount": yield_amount})
        _require_non_negative(operational_costs=operational_costs, fixed_costs=fixed_costs)

        total = operational_costs + fixed_costs
        return ProductionCost(
            total_cost=total,
            cost_per_kg=round(total / yield_amount, 2),
            operational_costs=operational_costs,
            fixed_costs=fixed_costs,
        )
