"""Engine-owned registries for variable definitions and interaction rules."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional

from scenario_engine.models.scenario import (
    InteractionEffect,
    ScenarioVariable,
    VariableKind,
)

logger = logging.getLogger(__name__)


class VariableRegistry:
    """Scenario variables keyed by their unique ``key``."""

    def __init__(self, variables: Iterable[ScenarioVariable] = ()) -> None:
        self._variables: dict[str, ScenarioVariable] = {}
        for variable in variables:
            self.register(variable)

    def register(self, variable: ScenarioVariable) -> None:
        if variable.key in self._variables:
            raise ValueError(f"Duplicate variable key: {variable.key}")
        self._variables[variable.key] = variable

    def get(self, key: str) -> Optional[ScenarioVariable]:
        return self._variables.get(key)

    def list(self) -> list[ScenarioVariable]:
        return list(self._variables.values())

    def continuous(self) -> list[ScenarioVariable]:
        return [v for v in self._variables.values() if v.kind == VariableKind.continuous]

    def update_variable(self, key: str, **changes: Any) -> Optional[ScenarioVariable]:
        """Replace a definition with ``changes`` applied; re-validated.

        Unknown keys are ignored and return None.
        """
        current = self._variables.get(key)
        if current is None:
            logger.warning("update_variable: unknown variable %s ignored", key)
            return None
        if changes.get("key", key) != key:
            raise ValueError("A variable's key cannot be changed")
        updated = ScenarioVariable.model_validate({**current.model_dump(), **changes})
        self._variables[key] = updated
        return updated

    def __contains__(self, key: object) -> bool:
        return key in self._variables

    def __iter__(self) -> Iterator[ScenarioVariable]:
        return iter(list(self._variables.values()))

    def __len__(self) -> int:
        return len(self._variables)


class InteractionRuleSet:
    """Interaction effects in declaration order, validated against a registry."""

    def __init__(
        self,
        registry: VariableRegistry,
        effects: Iterable[InteractionEffect] = (),
    ) -> None:
        self._registry = registry
        self._effects: list[InteractionEffect] = []
        for effect in effects:
            self.add(effect)

    def add(self, effect: InteractionEffect) -> None:
        unknown = [key for key in effect.variables if key not in self._registry]
        if unknown:
            raise ValueError(f"Interaction effect references unknown variables: {unknown}")
        self._effects.append(effect)

    def __iter__(self) -> Iterator[InteractionEffect]:
        return iter(list(self._effects))

    def __len__(self) -> int:
        return len(self._effects)
