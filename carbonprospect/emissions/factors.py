"""Reference emission factors, keyed by activity type.

Every factor is expressed in kilograms of CO2e per activity unit, so the
calculator divides by 1000 to reach tonnes.  Negative factors (recycling,
composting) represent avoided emissions.

The table is built once at import time and exposed through a read-only
mapping; pass it (or a substitute) explicitly to the calculator and the
renderer rather than importing copies of it elsewhere.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

Category = Literal[
    "stationary",
    "mobile",
    "refrigerant",
    "industrial",
    "agriculture",
    "purchased_energy",
    "business_travel",
    "commuting",
    "waste",
    "water",
    "purchased_goods",
    "it_equipment",
]

#: Categories whose emissions are direct (Scope 1).
SCOPE1_CATEGORIES = frozenset(
    {"stationary", "mobile", "refrigerant", "industrial", "agriculture"}
)

#: Categories whose emissions come from purchased energy (Scope 2).
SCOPE2_CATEGORIES = frozenset({"purchased_energy"})


def scope_for_category(category: str) -> int:
    """Return the GHG Protocol scope (1, 2 or 3) for an activity category."""
    if category in SCOPE1_CATEGORIES:
        return 1
    if category in SCOPE2_CATEGORIES:
        return 2
    return 3


class EmissionFactor(BaseModel):
    """A fixed multiplier converting an activity quantity into kg CO2e."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Activity key, e.g. 'naturalGas'.")
    factor: float = Field(description="kg CO2e per activity unit.")
    unit: str = Field(description="Factor unit, e.g. 'kg CO2e/therm'.")
    reference: str = Field(description="Citation for the factor.")
    label: str = Field(description="Display name used in report tables.")
    activity_unit: str = Field(
        default="",
        description="Unit appended to the raw quantity, e.g. 'therms'.",
    )
    category: Category

    @property
    def scope(self) -> int:
        return scope_for_category(self.category)


def _f(key, factor, unit, reference, label, activity_unit, category) -> EmissionFactor:
    return EmissionFactor(
        key=key,
        factor=factor,
        unit=unit,
        reference=reference,
        label=label,
        activity_unit=activity_unit,
        category=category,
    )


_EPA = "EPA Emission Factors Hub 2024"
_IPCC_AR5 = "IPCC AR5 GWP values"

_FACTORS = [
    # Scope 1: stationary and mobile combustion
    _f("naturalGas", 5.3, "kg CO2e/therm", _EPA, "Natural Gas Combustion", "therms", "stationary"),
    _f("diesel", 2.68, "kg CO2e/liter", _EPA, "Diesel Fuel", "liters", "mobile"),
    _f("petrol", 2.31, "kg CO2e/liter", _EPA, "Petrol Fuel", "liters", "mobile"),
    _f("vehicleFuel", 2.5, "kg CO2e/liter", "Average of diesel/petrol, EPA 2024", "Vehicle Fuel (mixed)", "liters", "mobile"),
    # Scope 1: fugitive refrigerants
    _f("refrigerantR410a", 2088, "kg CO2e/kg", _IPCC_AR5, "R-410A Refrigerant Leakage", "kg", "refrigerant"),
    _f("refrigerantR134a", 1430, "kg CO2e/kg", _IPCC_AR5, "R-134a Refrigerant Leakage", "kg", "refrigerant"),
    _f("refrigerantR32", 675, "kg CO2e/kg", _IPCC_AR5, "R-32 Refrigerant Leakage", "kg", "refrigerant"),
    _f("refrigerantR404a", 3922, "kg CO2e/kg", _IPCC_AR5, "R-404A Refrigerant Leakage", "kg", "refrigerant"),
    # Scope 1: industrial processes
    _f("steelProduction", 2100, "kg CO2e/tonne", "World Steel Association 2023", "Steel Production", "tonnes", "industrial"),
    _f("cementProduction", 820, "kg CO2e/tonne", "WBCSD Cement CO2 Protocol", "Cement Production", "tonnes", "industrial"),
    _f("aluminumProduction", 12000, "kg CO2e/tonne", "International Aluminium Institute 2023", "Aluminium Production", "tonnes", "industrial"),
    _f("chemicalUsage", 1500, "kg CO2e/tonne", "Industry average, ICCA 2023", "Chemical Usage", "tonnes", "industrial"),
    # Scope 1: agriculture, fertilisers and land use
    _f("livestockCattle", 2300, "kg CO2e/head/year", "IPCC 2019 Guidelines Vol 4 Ch 10 Table 10.11", "Cattle (Enteric Fermentation)", "head", "agriculture"),
    _f("livestockDairyCows", 3200, "kg CO2e/head/year", "IPCC 2019 Guidelines Vol 4 Ch 10 Table 10.11", "Dairy Cows", "head", "agriculture"),
    _f("livestockPigs", 200, "kg CO2e/head/year", "IPCC 2019 Guidelines Vol 4 Ch 10 Table 10.12", "Pigs", "head", "agriculture"),
    _f("livestockSheep", 150, "kg CO2e/head/year", "IPCC 2019 Guidelines Vol 4 Ch 10 Table 10.13", "Sheep", "head", "agriculture"),
    _f("livestockPoultry", 5, "kg CO2e/head/year", "IPCC 2019 Guidelines Vol 4 Ch 10", "Poultry", "head", "agriculture"),
    _f("fertilizersNitrogen", 4.42, "kg CO2e/kg N", "IPCC 2019 Guidelines Vol 4 Ch 11 Eq 11.1", "Nitrogen Fertilizer", "kg N", "agriculture"),
    _f("fertilizersPhosphorus", 0.2, "kg CO2e/kg P2O5", "Brentrup et al. 2016", "Phosphorus Fertilizer", "kg P2O5", "agriculture"),
    _f("fertilizersPotassium", 0.15, "kg CO2e/kg K2O", "Brentrup et al. 2016", "Potassium Fertilizer", "kg K2O", "agriculture"),
    _f("fertilizersUrea", 3.7, "kg CO2e/kg", "IPCC 2019 Guidelines Vol 4 Ch 11", "Urea Application", "kg", "agriculture"),
    _f("landUseChange", 500, "kg CO2e/hectare", "IPCC 2019 Guidelines Vol 4 Ch 2", "Land Use Change", "hectares", "agriculture"),
    _f("riceProduction", 1370, "kg CO2e/hectare", "IPCC 2019 Guidelines Vol 4 Ch 5.5", "Rice Cultivation", "hectares", "agriculture"),
    # Scope 2: purchased energy
    _f("electricity", 0.42, "kg CO2e/kWh", "National Grid Average 2024", "Grid Electricity", "kWh", "purchased_energy"),
    _f("renewableElectricity", 0, "kg CO2e/kWh", "Zero emissions for certified renewable", "Renewable Electricity", "kWh", "purchased_energy"),
    _f("steamPurchased", 65, "kg CO2e/MMBtu", _EPA, "Purchased Steam", "MMBtu", "purchased_energy"),
    _f("heatingPurchased", 73, "kg CO2e/MMBtu", _EPA, "Purchased Heating", "MMBtu", "purchased_energy"),
    _f("coolingPurchased", 65, "kg CO2e/MMBtu", _EPA, "Purchased Cooling", "MMBtu", "purchased_energy"),
    _f("dataCenter", 0.42, "kg CO2e/kWh", "Grid average with PUE 1.6", "Data Center Electricity", "kWh", "purchased_energy"),
    # Scope 3: value chain
    _f("businessFlights", 0.24, "kg CO2e/passenger mile", "DEFRA 2024 Business Travel", "Business Travel (Air)", "passenger miles", "business_travel"),
    _f("businessTravel", 0.185, "kg CO2e/km", "DEFRA 2024 Average car", "Business Travel (Road)", "km", "business_travel"),
    _f("hotelStays", 20, "kg CO2e/night", "Cornell Hotel Sustainability 2023", "Hotel Stays", "nights", "business_travel"),
    _f("employeeCommuting", 0.155, "kg CO2e/passenger mile", "EPA Commuter Model 2024", "Employee Commuting", "passenger miles", "commuting"),
    _f("wasteGenerated", 467, "kg CO2e/tonne", "EPA WARM Model 2024", "Waste to Landfill", "tonnes", "waste"),
    _f("wasteRecycled", -150, "kg CO2e/tonne", "EPA WARM Model 2024 (avoided)", "Waste Recycled", "tonnes", "waste"),
    _f("wasteComposted", -180, "kg CO2e/tonne", "EPA WARM Model 2024 (avoided)", "Waste Composted", "tonnes", "waste"),
    _f("waterUsage", 0.35, "kg CO2e/m³", "Water UK 2023", "Water Supply", "m³", "water"),
    _f("wastewater", 0.71, "kg CO2e/m³", "IPCC 2019 Guidelines Vol 5 Ch 6", "Wastewater Treatment", "m³", "water"),
    _f("paperConsumption", 183, "kg CO2e/ream", "EPA Paper Calculator 2024", "Paper Consumption", "reams", "purchased_goods"),
    _f("purchasedGoods", 0.5, "kg CO2e/$", "EEIO Model average", "Purchased Goods & Services", "", "purchased_goods"),
    _f("freight", 0.15, "kg CO2e/tonne-km", "GLEC Framework 2023", "Freight Transport", "tonne-km", "purchased_goods"),
    # Scope 3: IT equipment (full lifecycle)
    _f("laptops", 350, "kg CO2e/unit", "Dell Product Carbon Footprint 2023", "Laptops", "units", "it_equipment"),
    _f("monitors", 500, "kg CO2e/unit", "Industry average LCA studies", "Monitors", "units", "it_equipment"),
    _f("smartphones", 70, "kg CO2e/unit", "Apple Environmental Report 2023", "Smartphones", "units", "it_equipment"),
    _f("servers", 3000, "kg CO2e/unit", "HPE Carbon Footprint Data 2023", "Servers", "units", "it_equipment"),
]

EMISSION_FACTORS: Mapping[str, EmissionFactor] = MappingProxyType(
    {factor.key: factor for factor in _FACTORS}
)

#: Activity keys whose quantity is a currency amount rather than a physical unit.
CURRENCY_ACTIVITIES = frozenset({"purchasedGoods"})


def factors_for_scope(
    scope: int, factors: Mapping[str, EmissionFactor] = EMISSION_FACTORS
) -> list[EmissionFactor]:
    """Return the factors attributed to *scope*, in table order."""
    return [f for f in factors.values() if f.scope == scope]
