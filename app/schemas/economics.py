"""
Economics Schemas
=================

Pydantic models for the irrigation cost, ROI and production cost
calculators. Amounts are in the caller's currency; volumes in m³.
"""

from pydantic import BaseModel, ConfigDict, Field


class IrrigationCostRequest(BaseModel):
    """Request model for irrigation run cost"""

    water_volume: float = Field(..., ge=0, alias="waterVolume", description="Water applied (m³)")
    electricity_rate: float = Field(..., ge=0, alias="electricityRate", description="Electricity price per kWh")
    labor_cost: float = Field(default=0.0, ge=0, alias="laborCost", description="Labor cost of the run")

    model_config = ConfigDict(populate_by_name=True)


class RoiRequest(BaseModel):
    """Request model for return on investment"""

    initial_investment: float = Field(..., alias="initialInvestment", description="Up-front investment")
    yield_increase: float = Field(..., alias="yieldIncrease", description="Extra yield (kg)")
    product_price: float = Field(..., ge=0, alias="productPrice", description="Price per kg")
    operational_costs: float = Field(default=0.0, ge=0, alias="operationalCosts", description="Running costs")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "initialInvestment": 5000,
                "yieldIncrease": 1200,
                "productPrice": 2.5,
                "operationalCosts": 800,
            }
        },
    )


class ProductionCostRequest(BaseModel):
    """Request model for production cost per kg"""

    operational_costs: float = Field(..., ge=0, alias="operationalCosts", description="Running costs")
    yield_amount: float = Field(..., alias="yieldAmount", description="Harvested yield (kg)")
    fixed_costs: float = Field(default=0.0, ge=0, alias="fixedCosts", description="Fixed costs")

    model_config = ConfigDict(populate_by_name=True)
