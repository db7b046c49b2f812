"""Step-synchronous driver for the leave-dilemma model."""

from __future__ import annotations

import random
from typing import Any

from leave_dilemma.analysis.results import SimulationResult
from leave_dilemma.analysis.statistics import StepStatistics, collect_statistics
from leave_dilemma.core.config import SimulationConfig
from leave_dilemma.core.logging import bind_context, get_logger
from leave_dilemma.engine.matching import MatchingEngine
from leave_dilemma.engine.revision import RevisionEngine
from leave_dilemma.engine.separation import SeparationEngine
from leave_dilemma.genome.space import StrategySpace
from leave_dilemma.population.population import Population

logger = get_logger(__name__)


class Simulation:
    """Evolution of strategies in a Prisoner's Dilemma with leaving.

    Each call to ``step`` runs one full time step:

        1. pair unpartnered agents
        2. play one round (with action noise) and score it
        3. update every player's next intended action
        4. record statistics of the round
        5. exogenous, then endogenous, separation
        6. revise strategies of some exogenously separated agents
        7. correct the population back to its configured size

    All randomness comes from one ``random.Random``, seeded from
    ``config.seed`` unless a generator is passed in.

    Args:
        config: Run configuration. Defaults to ``SimulationConfig()``.
        rng: Optional random source to use instead of a seeded one.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or SimulationConfig()
        self._rng = rng or random.Random(self._config.seed)
        self.space = StrategySpace(self._config.leave_option)
        self._population = Population(
            self.space,
            self._rng,
            initial_strategy=self._config.initial_strategy,
        )
        self._tick = 0
        self._history: list[StepStatistics] = []
        self._build_engines()
        self.setup()

    def _build_engines(self) -> None:
        self._matching = MatchingEngine(self._config, self._rng)
        self._separation = SeparationEngine(self._config, self._rng)
        self._revision = RevisionEngine(self.space, self._config, self._rng)

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def population(self) -> Population:
        return self._population

    @property
    def tick(self) -> int:
        """Number of completed steps."""
        return self._tick

    @property
    def history(self) -> list[StepStatistics]:
        return list(self._history)

    def setup(self) -> None:
        """Create a fresh population and clear the step counter."""
        self._population.initialize(self._config.population_size)
        self._tick = 0
        self._history.clear()
        logger.info(
            "simulation_initialized",
            population_size=self._config.population_size,
            leave_option=self._config.leave_option,
            initial_strategy=self._config.initial_strategy,
            seed=self._config.seed,
        )

    def reset(self, seed: int | None = None) -> None:
        """Reseed the random source and start over.

        Args:
            seed: New seed. If None, ``config.seed`` is reused.
        """
        if seed is not None:
            self._config = self._config.with_changes(seed=seed)
            self._build_engines()
        self._rng.seed(self._config.seed)
        self.setup()

    def reconfigure(self, **changes: Any) -> SimulationConfig:
        """Change run parameters between steps.

        A new ``population_size`` takes effect at the end of the next
        step, when the population is corrected to its target size. A
        new ``initial_strategy`` applies to agents created from then on.

        Raises:
            ValueError: If ``leave_option`` would change, since that
                changes the strategy space, or a value is invalid.
        """
        if (
            "leave_option" in changes
            and changes["leave_option"] != self._config.leave_option
        ):
            raise ValueError("leave_option cannot change during a run; use a new run")
        self._config = self._config.with_changes(**changes)
        if "initial_strategy" in changes:
            self._population.set_initial_strategy(self._config.initial_strategy)
        self._build_engines()
        logger.info("simulation_reconfigured", changes=sorted(changes))
        return self._config

    def step(self) -> StepStatistics:
        """Advance the simulation by one time step.

        Returns:
            Statistics of the round played in this step.
        """
        population = self._population
        tick = self._tick + 1

        self._matching.form_pairs(population)
        self._matching.play_round(population)
        self._matching.update_intentions(population)

        stats = collect_statistics(population, self.space, tick)

        separation = self._separation.separate(population)
        stats.unpartnered_fraction = len(population.unpartnered()) / len(population)

        revision = self._revision.revise(population, separation.separated)
        population.resize_to(self._config.population_size)
        population.check_invariants()

        self._tick = tick
        self._history.append(stats)
        logger.debug(
            "step_completed",
            tick=tick,
            outcome_cc=stats.outcome_cc,
            outcome_cd=stats.outcome_cd,
            outcome_dd=stats.outcome_dd,
            mean_payoff=stats.mean_payoff,
            exogenous_breaks=separation.exogenous_breaks,
            endogenous_breaks=separation.endogenous_breaks,
            revised=revision.revised,
        )
        return stats

    def run(self, steps: int, record_interval: int = 1) -> SimulationResult:
        """Run a batch of steps.

        Args:
            steps: Number of steps to advance.
            record_interval: Keep every Nth step in the result. The
                last step is always kept.

        Returns:
            SimulationResult with the recorded snapshots.
        """
        if steps < 0:
            raise ValueError(f"steps must be >= 0, got {steps}")
        if record_interval < 1:
            raise ValueError(f"record_interval must be >= 1, got {record_interval}")

        result = SimulationResult(config=self._config.to_dict())
        with bind_context(seed=self._config.seed):
            for i in range(1, steps + 1):
                stats = self.step()
                if i % record_interval == 0 or i == steps:
                    result.snapshots.append(stats)
        return result
