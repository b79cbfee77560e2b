"""Starting content catalog.

Every function returns fresh objects so callers can mutate them freely.
"""

from stellar_reality.models import (
    Building,
    HappinessBoost,
    PopulationGrowthBoost,
    ProductionMultiplier,
    ResearchItem,
    Resource,
    UnlockBuilding,
)
from stellar_reality.models.colony import Colony

STARTING_POPULATION = 100.0
STARTING_HAPPINESS = 100.0


def get_default_resources() -> dict[str, Resource]:
    """Starting resource ledger."""
    resources = [
        Resource("Food", amount=1000.0, production_rate=10.0, consumption_rate=1.0),
        Resource("Energy", amount=500.0, production_rate=5.0, consumption_rate=1.0),
        Resource("Minerals", amount=200.0, production_rate=2.0, consumption_rate=0.0),
        Resource("Water", amount=800.0, production_rate=8.0, consumption_rate=2.0),
    ]
    return {resource.name: resource for resource in resources}


def get_default_buildings() -> dict[str, Building]:
    """Starting building registry (one of each already built)."""
    buildings = [
        Building(
            name="Farm",
            resource_production={"Food": 5.0},
            resource_consumption={"Energy": 1.0, "Water": 2.0},
            construction_cost={"Minerals": 50.0},
            construction_time=5.0,
            quantity=1,
        ),
        Building(
            name="Solar Panel",
            resource_production={"Energy": 3.0},
            construction_cost={"Minerals": 30.0},
            construction_time=3.0,
            quantity=1,
        ),
        Building(
            name="Water Extractor",
            resource_production={"Water": 4.0},
            resource_consumption={"Energy": 2.0},
            construction_cost={"Minerals": 40.0},
            construction_time=4.0,
            quantity=1,
        ),
    ]
    return {building.name: building for building in buildings}


def get_hydroponics_lab() -> Building:
    """Building unlocked by the Hydroponics research."""
    return Building(
        name="Hydroponics Lab",
        resource_production={"Food": 10.0},
        resource_consumption={"Energy": 3.0, "Water": 5.0},
        construction_cost={"Minerals": 100.0},
        construction_time=10.0,
        quantity=0,
    )


def get_default_research() -> list[ResearchItem]:
    """Research tree in display order."""
    return [
        ResearchItem(
            name="Advanced Farming",
            description="Increases food production by 50%",
            cost=100.0,
            effects=[ProductionMultiplier("Food", 1.5)],
        ),
        ResearchItem(
            name="Efficient Solar Cells",
            description="Increases energy production by 50%",
            cost=150.0,
            effects=[ProductionMultiplier("Energy", 1.5)],
        ),
        ResearchItem(
            name="Hydroponics",
            description="Unlocks Hydroponics Lab for food production",
            cost=200.0,
            effects=[UnlockBuilding(get_hydroponics_lab())],
        ),
        ResearchItem(
            name="Community Center",
            description="Boosts happiness and population growth",
            cost=250.0,
            effects=[HappinessBoost(10.0), PopulationGrowthBoost(0.05)],
        ),
    ]


def new_colony(max_events: int | None = 100) -> Colony:
    """Create a colony in its starting state."""
    return Colony(
        resources=get_default_resources(),
        buildings=get_default_buildings(),
        research_items=get_default_research(),
        population=STARTING_POPULATION,
        happiness=STARTING_HAPPINESS,
        tech_points=0.0,
        day=1,
        max_events=max_events,
    )
