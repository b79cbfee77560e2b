"""Colony aggregate: the only owner of simulation state."""

from dataclasses import dataclass, field

from stellar_reality.models import (
    Building,
    Effect,
    HappinessBoost,
    PopulationGrowthBoost,
    ProductionMultiplier,
    ResearchItem,
    Resource,
    UnlockBuilding,
)
from stellar_reality.models.errors import (
    AlreadyCompletedError,
    InsufficientResourceError,
    InsufficientTechPointsError,
    NotFoundError,
)

FOOD = "Food"
WATER = "Water"

GROWTH_RATE = 0.01
HAPPINESS_SENSITIVITY = 5.0
TECH_POINTS_PER_CAPITA = 0.1
MAX_HAPPINESS = 100.0


@dataclass
class Colony:
    """
    Current state of the colony.

    Resources or buildings referenced by name but missing from the ledger are
    skipped silently when rates or effects are applied; they are never
    created on the fly.
    """

    resources: dict[str, Resource]
    buildings: dict[str, Building]
    research_items: list[ResearchItem]
    population: float = 100.0
    happiness: float = 100.0
    tech_points: float = 0.0
    day: int = 1
    events: list[str] = field(default_factory=list)
    max_events: int | None = 100

    def tick(self) -> None:
        """Advance the colony by one day."""
        # Step order matters: each step reads values written by the previous one
        for resource in self.resources.values():
            resource.amount += resource.production_rate - resource.consumption_rate
            resource.amount = max(resource.amount, 0.0)

        food = self.resources.get(FOOD)
        water = self.resources.get(WATER)
        food_consumed = min(self.population, food.amount if food else 0.0)
        water_consumed = min(self.population, water.amount if water else 0.0)
        if food:
            food.amount -= food_consumed
        if water:
            water.amount -= water_consumed

        fed = food_consumed >= self.population and water_consumed >= self.population
        growth_rate = GROWTH_RATE if fed else -GROWTH_RATE
        self.population += self.population * growth_rate
        self.population = max(self.population, 0.0)

        food_ratio = food_consumed / max(self.population, 1.0)
        water_ratio = water_consumed / max(self.population, 1.0)
        self.happiness += (food_ratio + water_ratio - 1.0) * HAPPINESS_SENSITIVITY
        self.happiness = min(max(self.happiness, 0.0), MAX_HAPPINESS)

        self.tech_points += (
            TECH_POINTS_PER_CAPITA * self.population * (self.happiness / MAX_HAPPINESS)
        )

        self.day += 1

    def can_afford(self, costs: dict[str, float]) -> str | None:
        """Return the first resource short of its cost, or None if affordable."""
        for resource_name, cost in costs.items():
            resource = self.resources.get(resource_name)
            available = resource.amount if resource else 0.0
            if available < cost:
                return resource_name
        return None

    def build(self, name: str) -> Building:
        """
        Construct one unit of a building.

        Raises:
            NotFoundError: unknown building name.
            InsufficientResourceError: some cost exceeds the stock; nothing
                is deducted in that case.
        """
        building = self.buildings.get(name)
        if building is None:
            raise NotFoundError("Building", name)

        missing = self.can_afford(building.construction_cost)
        if missing is not None:
            raise InsufficientResourceError(missing)

        for resource_name, cost in building.construction_cost.items():
            resource = self.resources.get(resource_name)
            if resource:
                resource.amount -= cost

        building.quantity += 1
        for resource_name, rate in building.resource_production.items():
            resource = self.resources.get(resource_name)
            if resource:
                resource.production_rate += rate
        for resource_name, rate in building.resource_consumption.items():
            resource = self.resources.get(resource_name)
            if resource:
                resource.consumption_rate += rate

        return building

    def get_research(self, name: str) -> ResearchItem | None:
        """Find a research item by exact name."""
        return next((item for item in self.research_items if item.name == name), None)

    def research(self, name: str) -> ResearchItem:
        """
        Complete a research item and apply its effects once.

        Happiness is only clamped from above, by HappinessBoost. A value an
        event pushed out of [0, 100] stays there until the next tick.

        Raises:
            NotFoundError: unknown research name.
            AlreadyCompletedError: the item was completed before.
            InsufficientTechPointsError: not enough tech points.
        """
        item = self.get_research(name)
        if item is None:
            raise NotFoundError("Research", name)
        if item.completed:
            raise AlreadyCompletedError(name)
        if self.tech_points < item.cost:
            raise InsufficientTechPointsError(item.cost, self.tech_points)

        self.tech_points -= item.cost
        item.completed = True
        for effect in item.effects:
            self.apply_effect(effect)

        return item

    def apply_effect(self, effect: Effect) -> None:
        """Apply a single research effect."""
        if isinstance(effect, ProductionMultiplier):
            resource = self.resources.get(effect.resource)
            if resource:
                resource.production_rate *= effect.factor
        elif isinstance(effect, UnlockBuilding):
            self.buildings[effect.building.name] = effect.building.copy()
        elif isinstance(effect, PopulationGrowthBoost):
            self.population *= 1.0 + effect.fraction
        elif isinstance(effect, HappinessBoost):
            self.happiness = min(self.happiness + effect.amount, MAX_HAPPINESS)
        else:
            raise TypeError(f"Unknown research effect: {effect!r}")

    def record_event(self, message: str) -> None:
        """Append to the event log, dropping the oldest entries past the cap."""
        self.events.append(message)
        if self.max_events is not None and len(self.events) > self.max_events:
            del self.events[: len(self.events) - self.max_events]

    def recent_events(self, count: int) -> list[str]:
        """Most recent events, newest first."""
        if count <= 0:
            return []
        return list(reversed(self.events[-count:]))
