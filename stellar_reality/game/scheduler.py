"""Simulation loop driver: tick cadence, random events and player commands."""

import logging
import random
import time
from collections.abc import Callable

from stellar_reality.game.input import (
    NORMAL,
    Command,
    InputMode,
    Mode,
    Quit,
    handle_key,
)
from stellar_reality.models.colony import Colony
from stellar_reality.models.errors import ColonyError
from stellar_reality.models.events import random_event
from stellar_reality.utils.config import SimulationConfig

logger = logging.getLogger(__name__)


class ColonyScheduler:
    """
    Sole owner of the colony while the game runs.

    Ticks, commands and events are applied one after another from the same
    loop, so no operation ever observes another half-done.
    """

    def __init__(
        self,
        colony: Colony,
        config: SimulationConfig | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.colony = colony
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.clock = clock
        self.input_mode: InputMode = NORMAL
        self.last_tick = clock()

    def tick_if_due(self) -> bool:
        """Tick once if the interval has elapsed since the last tick."""
        now = self.clock()
        if now - self.last_tick < self.config.tick_interval_seconds:
            return False

        self.colony.tick()
        self.last_tick = now
        logger.debug(
            "Day %d: population %.1f, happiness %.1f, tech points %.1f",
            self.colony.day,
            self.colony.population,
            self.colony.happiness,
            self.colony.tech_points,
        )
        return True

    def roll_event(self) -> str | None:
        """Trigger a random event with the configured probability."""
        if self.rng.random() >= self.config.event_chance:
            return None

        message = random_event(self.colony, self.rng)
        self.colony.record_event(message)
        logger.info("Event on day %d: %s", self.colony.day, message)
        return message

    def submit(self, command: Command) -> str:
        """Run a build or research command and log its outcome."""
        try:
            if command.mode is Mode.BUILD:
                self.colony.build(command.name)
                message = f"Building {command.name} constructed successfully!"
            elif command.mode is Mode.RESEARCH:
                self.colony.research(command.name)
                message = f"Research {command.name} completed successfully!"
            else:
                raise ValueError(f"Not a command mode: {command.mode}")
        except ColonyError as e:
            message = f"Error: {e}"
            logger.info("%s %r rejected: %s", command.mode.value, command.name, e)
        else:
            logger.info(message)

        self.colony.record_event(message)
        return message

    def step(self, key: str | None = None) -> bool:
        """
        Run one loop iteration.

        Returns False once the player has asked to quit.
        """
        self.tick_if_due()

        if key is not None:
            self.input_mode, action = handle_key(self.input_mode, key)
            if isinstance(action, Quit):
                return False
            if isinstance(action, Command):
                self.submit(action)

        self.roll_event()
        return True

    def advance_days(self, days: int) -> None:
        """Headless run: one tick and one event roll per day."""
        for _ in range(days):
            self.colony.tick()
            self.roll_event()
        self.last_tick = self.clock()
