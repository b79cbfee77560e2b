"""Data models for Stellar Reality colony entities."""

from dataclasses import dataclass, field


@dataclass
class Resource:
    """A named stock with linear production and consumption rates."""

    name: str
    amount: float
    production_rate: float = 0.0  # per day
    consumption_rate: float = 0.0  # per day

    @property
    def net_rate(self) -> float:
        """Production minus consumption per day."""
        return self.production_rate - self.consumption_rate


@dataclass
class Building:
    """A constructible structure with fixed per-unit rate deltas."""

    name: str
    resource_production: dict[str, float] = field(default_factory=dict)
    resource_consumption: dict[str, float] = field(default_factory=dict)
    construction_cost: dict[str, float] = field(default_factory=dict)
    construction_time: float = 0.0  # informational, not used by tick
    quantity: int = 0

    def copy(self) -> "Building":
        """Return an independent copy (rate and cost maps included)."""
        return Building(
            name=self.name,
            resource_production=dict(self.resource_production),
            resource_consumption=dict(self.resource_consumption),
            construction_cost=dict(self.construction_cost),
            construction_time=self.construction_time,
            quantity=self.quantity,
        )


@dataclass(frozen=True)
class ProductionMultiplier:
    """Multiply a resource's production rate."""

    resource: str
    factor: float


@dataclass(frozen=True)
class UnlockBuilding:
    """Add a building to the registry."""

    building: Building


@dataclass(frozen=True)
class PopulationGrowthBoost:
    """One-time step increase of the population by a fraction."""

    fraction: float


@dataclass(frozen=True)
class HappinessBoost:
    """Raise happiness by a fixed amount (capped at 100)."""

    amount: float


Effect = ProductionMultiplier | UnlockBuilding | PopulationGrowthBoost | HappinessBoost


@dataclass
class ResearchItem:
    """A one-shot upgrade bought with tech points."""

    name: str
    description: str
    cost: float
    effects: list[Effect] = field(default_factory=list)
    completed: bool = False

    @property
    def status(self) -> str:
        """Human-readable status."""
        return "Completed" if self.completed else "Not Started"
