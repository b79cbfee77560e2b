"""CP-SAT advisor: which buildings to construct with the current stock."""

import logging
import math
from dataclasses import dataclass, field

from ortools.sat.python import cp_model

from stellar_reality.models import Resource
from stellar_reality.models.colony import FOOD, WATER, Colony
from stellar_reality.models.errors import NotFoundError

logger = logging.getLogger(__name__)

SCALE = 100  # CP-SAT works on integers; rates and costs keep two decimals
MAX_UNITS_PER_BUILDING = 20


def _scaled(value: float) -> int:
    return round(value * SCALE)


@dataclass
class BuildPlan:
    """Recommended constructions and what they cost and yield."""

    target: str
    builds: dict[str, int] = field(default_factory=dict)
    cost: dict[str, float] = field(default_factory=dict)
    gain: float = 0.0  # per-day net production gained for the target

    @property
    def is_empty(self) -> bool:
        return not self.builds


class BuildAdvisor:
    """
    OR-Tools CP-SAT model over building counts.

    Constraints:
    - total construction cost fits in the current stock
    - no resource's daily balance drops below zero (or below its current
      value when it is already negative); Food and Water balances include
      what the population eats and drinks each tick

    Objective: maximize the target resource's net production gain.
    """

    def __init__(self, colony: Colony, time_limit_seconds: float = 10.0):
        self.colony = colony
        self.time_limit_seconds = time_limit_seconds

    def _daily_balance(self, resource: Resource) -> float:
        """Net rate minus what the population takes from the stock each tick."""
        if resource.name in (FOOD, WATER):
            return resource.net_rate - self.colony.population
        return resource.net_rate

    def _rate_delta(self, building_name: str, resource_name: str) -> int:
        building = self.colony.buildings[building_name]
        produced = building.resource_production.get(resource_name, 0.0)
        consumed = building.resource_consumption.get(resource_name, 0.0)
        return _scaled(produced - consumed)

    def _upper_bound(self, building_name: str) -> int:
        """Most units affordable on their own with the current stock."""
        bound = MAX_UNITS_PER_BUILDING
        for resource_name, cost in self.colony.buildings[
            building_name
        ].construction_cost.items():
            if cost <= 0:
                continue
            resource = self.colony.resources.get(resource_name)
            available = resource.amount if resource else 0.0
            bound = min(bound, math.floor(available / cost))
        return max(bound, 0)

    def recommend(self, target: str) -> BuildPlan:
        """Solve for the best affordable build set for ``target``."""
        if target not in self.colony.resources:
            raise NotFoundError("Resource", target)

        model = cp_model.CpModel()
        counts = {
            name: model.NewIntVar(0, self._upper_bound(name), f"count_{name}")
            for name in self.colony.buildings
        }

        # Constraint 1: costs fit in the stock
        cost_resources = {
            resource_name
            for building in self.colony.buildings.values()
            for resource_name in building.construction_cost
        }
        for resource_name in cost_resources:
            resource = self.colony.resources.get(resource_name)
            stock = _scaled(resource.amount) if resource else 0
            model.Add(
                sum(
                    counts[name]
                    * _scaled(building.construction_cost.get(resource_name, 0.0))
                    for name, building in self.colony.buildings.items()
                )
                <= stock
            )

        # Constraint 2: keep every net rate sustainable
        for resource_name, resource in self.colony.resources.items():
            current = _scaled(self._daily_balance(resource))
            model.Add(
                current
                + sum(
                    counts[name] * self._rate_delta(name, resource_name)
                    for name in self.colony.buildings
                )
                >= min(0, current)
            )

        model.Maximize(
            sum(
                counts[name] * self._rate_delta(name, target)
                for name in self.colony.buildings
            )
        )

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = self.time_limit_seconds

        status = solver.Solve(model)

        if status not in [cp_model.OPTIMAL, cp_model.FEASIBLE]:
            logger.warning("No build plan found for %s", target)
            return BuildPlan(target=target)

        plan = BuildPlan(target=target)
        for name, var in counts.items():
            count = solver.Value(var)
            if count <= 0:
                continue
            plan.builds[name] = count
            for resource_name, cost in self.colony.buildings[
                name
            ].construction_cost.items():
                plan.cost[resource_name] = (
                    plan.cost.get(resource_name, 0.0) + cost * count
                )

        plan.gain = solver.ObjectiveValue() / SCALE
        logger.debug("Build plan for %s: %s (gain %.2f)", target, plan.builds, plan.gain)
        return plan
