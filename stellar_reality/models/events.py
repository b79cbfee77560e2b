"""Random world events.

Events mutate the colony directly and without validation. Some scale the
current values (energy stock, population) instead of adding a fixed delta,
so their absolute effect depends on the colony's state. Happiness is left
unclamped; the next tick brings it back into range.
"""

import random
from enum import Enum

from stellar_reality.models.colony import Colony


class WorldEvent(Enum):
    """Catalog of world events."""

    SOLAR_FLARE = "Solar Flare"
    METEOR_STRIKE = "Meteor Strike"
    DISEASE_OUTBREAK = "Disease Outbreak"
    TECH_BREAKTHROUGH = "Technological Breakthrough"
    ALIEN_ARTIFACT = "Alien Artifact Discovered"
    WATER_SOURCE = "Water Source Found"
    VOLUNTEER_PROGRAM = "Volunteer Program"


EVENT_DESCRIPTIONS: dict[WorldEvent, str] = {
    WorldEvent.SOLAR_FLARE: "A solar flare has increased energy production!",
    WorldEvent.METEOR_STRIKE: "A meteor strike has yielded additional minerals!",
    WorldEvent.DISEASE_OUTBREAK: (
        "A disease outbreak has reduced the population and happiness."
    ),
    WorldEvent.TECH_BREAKTHROUGH: (
        "A technological breakthrough has yielded additional tech points!"
    ),
    WorldEvent.ALIEN_ARTIFACT: (
        "An alien artifact has been discovered, boosting research and morale!"
    ),
    WorldEvent.WATER_SOURCE: "A new water source has been discovered!",
    WorldEvent.VOLUNTEER_PROGRAM: (
        "A successful volunteer program has boosted happiness "
        "and attracted new colonists!"
    ),
}


def _add_to_stock(colony: Colony, resource_name: str, amount: float) -> None:
    resource = colony.resources.get(resource_name)
    if resource:
        resource.amount += amount


def apply_event(colony: Colony, event: WorldEvent) -> str:
    """Apply an event to the colony and return its description."""
    if event is WorldEvent.SOLAR_FLARE:
        energy = colony.resources.get("Energy")
        if energy:
            energy.amount *= 1.5
    elif event is WorldEvent.METEOR_STRIKE:
        _add_to_stock(colony, "Minerals", 100.0)
    elif event is WorldEvent.DISEASE_OUTBREAK:
        colony.population *= 0.9
        colony.happiness -= 10.0
    elif event is WorldEvent.TECH_BREAKTHROUGH:
        colony.tech_points += 50.0
    elif event is WorldEvent.ALIEN_ARTIFACT:
        colony.tech_points += 100.0
        colony.happiness += 5.0
    elif event is WorldEvent.WATER_SOURCE:
        _add_to_stock(colony, "Water", 200.0)
    elif event is WorldEvent.VOLUNTEER_PROGRAM:
        colony.happiness += 15.0
        colony.population *= 1.05

    return EVENT_DESCRIPTIONS[event]


def format_event(event: WorldEvent, description: str) -> str:
    """Event-log line for an applied event."""
    return f"{event.value} - {description}"


def random_event(colony: Colony, rng: random.Random) -> str:
    """Pick an event uniformly at random, apply it and return the log line."""
    event = rng.choice(list(WorldEvent))
    return format_event(event, apply_event(colony, event))
