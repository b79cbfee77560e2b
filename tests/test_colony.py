import random

import pytest

from stellar_reality.models import (
    Building,
    HappinessBoost,
    PopulationGrowthBoost,
    ProductionMultiplier,
    ResearchItem,
    UnlockBuilding,
)
from stellar_reality.models.errors import (
    AlreadyCompletedError,
    ColonyError,
    InsufficientResourceError,
    InsufficientTechPointsError,
    NotFoundError,
)
from stellar_reality.models.events import WorldEvent, apply_event


def snapshot(colony):
    """Comparable copy of every mutable value in the colony."""
    return {
        "resources": {
            name: (r.amount, r.production_rate, r.consumption_rate)
            for name, r in colony.resources.items()
        },
        "buildings": {name: b.quantity for name, b in colony.buildings.items()},
        "research": [item.completed for item in colony.research_items],
        "population": colony.population,
        "happiness": colony.happiness,
        "tech_points": colony.tech_points,
        "day": colony.day,
    }


def test_tick_follows_step_order(colony):
    colony.tick()

    # Food: 1000 + 10 - 1, then the population of 100 eats 100
    assert colony.resources["Food"].amount == pytest.approx(909.0)
    assert colony.resources["Water"].amount == pytest.approx(706.0)
    assert colony.resources["Energy"].amount == pytest.approx(504.0)
    assert colony.resources["Minerals"].amount == pytest.approx(202.0)
    assert colony.population == pytest.approx(101.0)
    assert colony.happiness == pytest.approx(100.0)
    assert colony.tech_points == pytest.approx(10.1)
    assert colony.day == 2


def test_tick_starvation_shrinks_population_and_happiness(colony):
    for name in ("Food", "Water"):
        resource = colony.resources[name]
        resource.amount = 0.0
        resource.production_rate = 0.0
        resource.consumption_rate = 0.0

    colony.tick()

    assert colony.population == pytest.approx(99.0)
    assert colony.happiness == pytest.approx(95.0)
    assert colony.tech_points == pytest.approx(0.1 * 99.0 * 0.95)


def test_tick_partial_rations_uses_updated_population(colony):
    food = colony.resources["Food"]
    food.amount = 40.0
    food.production_rate = 0.0
    food.consumption_rate = 0.0
    colony.happiness = 50.0

    colony.tick()

    # Food stock covers 40 of 100 colonists, so the colony shrinks to 99
    assert food.amount == pytest.approx(0.0)
    assert colony.population == pytest.approx(99.0)
    expected = 50.0 + (40.0 / 99.0 + 100.0 / 99.0 - 1.0) * 5.0
    assert colony.happiness == pytest.approx(expected)


def test_tick_clamps_amounts_at_zero(colony):
    energy = colony.resources["Energy"]
    energy.amount = 2.0
    energy.consumption_rate = 50.0

    colony.tick()

    assert energy.amount == 0.0


def test_tick_without_food_or_water_resources(colony):
    del colony.resources["Food"]
    del colony.resources["Water"]

    colony.tick()

    assert colony.population == pytest.approx(99.0)
    assert colony.day == 2


def test_build_farm(colony):
    colony.build("Farm")

    assert colony.resources["Minerals"].amount == pytest.approx(150.0)
    assert colony.buildings["Farm"].quantity == 2
    assert colony.resources["Food"].production_rate == pytest.approx(15.0)
    assert colony.resources["Energy"].consumption_rate == pytest.approx(2.0)
    assert colony.resources["Water"].consumption_rate == pytest.approx(4.0)


def test_build_conserves_costs_and_rates(colony):
    before = snapshot(colony)
    building = colony.buildings["Water Extractor"]

    colony.build("Water Extractor")

    after = snapshot(colony)
    for name, (amount, production, consumption) in before["resources"].items():
        new_amount, new_production, new_consumption = after["resources"][name]
        assert new_amount == pytest.approx(
            amount - building.construction_cost.get(name, 0.0)
        )
        assert new_production == pytest.approx(
            production + building.resource_production.get(name, 0.0)
        )
        assert new_consumption == pytest.approx(
            consumption + building.resource_consumption.get(name, 0.0)
        )


def test_build_unknown_building(colony):
    before = snapshot(colony)

    with pytest.raises(NotFoundError, match="Building not found"):
        colony.build("Spaceport")

    assert snapshot(colony) == before


def test_build_is_case_sensitive(colony):
    with pytest.raises(NotFoundError):
        colony.build("farm")


def test_build_insufficient_resources_changes_nothing(colony):
    colony.resources["Minerals"].amount = 49.0
    before = snapshot(colony)

    with pytest.raises(InsufficientResourceError) as exc_info:
        colony.build("Farm")

    assert exc_info.value.resource == "Minerals"
    assert str(exc_info.value) == "Not enough Minerals."
    assert snapshot(colony) == before


def test_build_validates_every_cost_before_deducting(colony):
    colony.buildings["Reactor"] = Building(
        name="Reactor",
        resource_production={"Energy": 20.0},
        construction_cost={"Minerals": 100.0, "Water": 5000.0},
    )
    before = snapshot(colony)

    with pytest.raises(InsufficientResourceError) as exc_info:
        colony.build("Reactor")

    assert exc_info.value.resource == "Water"
    assert snapshot(colony) == before


def test_build_cost_in_missing_resource_is_unaffordable(colony):
    colony.buildings["Forge"] = Building(
        name="Forge", construction_cost={"Iron": 10.0}
    )

    with pytest.raises(InsufficientResourceError, match="Not enough Iron."):
        colony.build("Forge")


def test_build_skips_rates_for_missing_resources(colony):
    colony.buildings["Refinery"] = Building(
        name="Refinery",
        resource_production={"Fuel": 4.0, "Energy": 1.0},
        resource_consumption={"Ore": 2.0},
        construction_cost={"Minerals": 10.0},
    )

    colony.build("Refinery")

    assert "Fuel" not in colony.resources
    assert "Ore" not in colony.resources
    assert colony.resources["Energy"].production_rate == pytest.approx(6.0)
    assert colony.buildings["Refinery"].quantity == 1


def test_research_without_tech_points(colony):
    before = snapshot(colony)

    with pytest.raises(InsufficientTechPointsError, match="Not enough tech points"):
        colony.research("Advanced Farming")

    assert snapshot(colony) == before


def test_research_advanced_farming(colony):
    colony.tech_points = 100.0

    item = colony.research("Advanced Farming")

    assert item.completed
    assert colony.tech_points == pytest.approx(0.0)
    assert colony.resources["Food"].production_rate == pytest.approx(15.0)


def test_research_twice_fails_without_side_effects(colony):
    colony.tech_points = 500.0
    colony.research("Advanced Farming")
    before = snapshot(colony)

    with pytest.raises(AlreadyCompletedError, match="Research already completed"):
        colony.research("Advanced Farming")

    assert snapshot(colony) == before


def test_completed_check_runs_before_tech_points(colony):
    colony.tech_points = 100.0
    colony.research("Advanced Farming")
    assert colony.tech_points == pytest.approx(0.0)

    with pytest.raises(AlreadyCompletedError):
        colony.research("Advanced Farming")


def test_research_unknown_item(colony):
    colony.tech_points = 1000.0

    with pytest.raises(NotFoundError, match="Research not found"):
        colony.research("Warp Drive")


def test_research_multipliers_compound(colony):
    colony.research_items.append(
        ResearchItem(
            name="Vertical Farming",
            description="Doubles food production",
            cost=10.0,
            effects=[ProductionMultiplier("Food", 2.0)],
        )
    )
    colony.tech_points = 110.0

    colony.research("Advanced Farming")
    colony.research("Vertical Farming")

    assert colony.resources["Food"].production_rate == pytest.approx(30.0)


def test_research_hydroponics_unlocks_building(colony):
    colony.tech_points = 200.0

    colony.research("Hydroponics")

    lab = colony.buildings["Hydroponics Lab"]
    assert lab.quantity == 0
    assert lab.construction_cost == {"Minerals": 100.0}

    colony.build("Hydroponics Lab")

    assert lab.quantity == 1
    assert colony.resources["Food"].production_rate == pytest.approx(20.0)
    template = colony.research_items[2].effects[0].building
    assert template.quantity == 0


def test_unlock_building_overwrites_existing(colony):
    colony.apply_effect(
        UnlockBuilding(Building(name="Farm", resource_production={"Food": 8.0}))
    )

    farm = colony.buildings["Farm"]
    assert farm.quantity == 0
    assert farm.resource_production == {"Food": 8.0}


def test_research_community_center(colony):
    colony.tech_points = 300.0
    colony.happiness = 95.0

    colony.research("Community Center")

    assert colony.happiness == pytest.approx(100.0)
    assert colony.population == pytest.approx(105.0)
    assert colony.tech_points == pytest.approx(50.0)


def test_happiness_boost_below_cap(colony):
    colony.happiness = 60.0

    colony.apply_effect(HappinessBoost(10.0))

    assert colony.happiness == pytest.approx(70.0)


def test_population_boost_is_one_time(colony):
    colony.apply_effect(PopulationGrowthBoost(0.05))
    colony.tick()

    # Regular growth of 1% on top of the boosted population
    assert colony.population == pytest.approx(105.0 * 1.01)


def test_production_multiplier_on_missing_resource_is_noop(colony):
    before = snapshot(colony)

    colony.apply_effect(ProductionMultiplier("Antimatter", 3.0))

    assert snapshot(colony) == before


def test_unknown_effect_type(colony):
    with pytest.raises(TypeError):
        colony.apply_effect("double everything")


def test_event_log_keeps_most_recent(colony):
    colony.max_events = 3
    for i in range(5):
        colony.record_event(f"event {i}")

    assert colony.events == ["event 2", "event 3", "event 4"]
    assert colony.recent_events(2) == ["event 4", "event 3"]
    assert colony.recent_events(0) == []


def test_event_log_unbounded(colony):
    colony.max_events = None
    for i in range(250):
        colony.record_event(f"event {i}")

    assert len(colony.events) == 250


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
def test_invariants_hold_over_random_sessions(colony, seed):
    rng = random.Random(seed)
    building_names = list(colony.buildings) + ["Hydroponics Lab", "Spaceport"]
    research_names = [item.name for item in colony.research_items] + ["Warp Drive"]

    for _ in range(300):
        roll = rng.random()
        if roll < 0.6:
            colony.tick()
            assert 0.0 <= colony.happiness <= 100.0
        elif roll < 0.8:
            try:
                colony.build(rng.choice(building_names))
            except ColonyError:
                pass
        elif roll < 0.95:
            try:
                colony.research(rng.choice(research_names))
            except ColonyError:
                pass
        else:
            apply_event(colony, rng.choice(list(WorldEvent)))

        assert all(r.amount >= 0.0 for r in colony.resources.values())
        assert colony.population >= 0.0
        assert colony.tech_points >= 0.0


def test_research_keeps_happiness_in_range(colony):
    colony.tech_points = 10_000.0
    for item in colony.research_items:
        colony.research(item.name)
        assert 0.0 <= colony.happiness <= 100.0


def test_research_leaves_out_of_range_happiness_until_next_tick(colony):
    apply_event(colony, WorldEvent.VOLUNTEER_PROGRAM)
    colony.tech_points = 100.0

    colony.research("Advanced Farming")
    assert colony.happiness == pytest.approx(115.0)

    colony.tick()
    assert colony.happiness == pytest.approx(100.0)
