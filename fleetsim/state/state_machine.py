"""State machine implementation for managing validated state transitions.

This module provides a finite state machine that enforces transition rules
and runs the action attached to a transition. It drives the mission
lifecycle (PENDING → ASSIGNED → IN_PROGRESS → COMPLETED).
"""

from collections.abc import Callable, Collection
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from fleetsim.errors import IllegalTransitionError

State = TypeVar("State", bound=Enum)
"""Type variable for state enumerations that extend Enum."""

ActionFn = Callable[..., Any]
"""Type alias for action effect functions."""

StateGraph = dict[Enum, Collection["Action"]]
"""Mapping from each state to the actions leaving it."""


@dataclass(frozen=True)
class Action:
    """Represents a state transition action with an optional effect function.

    Attributes:
        state: The target state this action transitions to.
        effect: Optional function to execute when this action is performed.
    """

    state: Enum
    effect: ActionFn | None = None

    def __call__(self, *args, **kwargs) -> Any:
        """Execute the action's effect function if it exists.

        Returns:
            The result of the effect function, or None if no effect is defined.
        """
        if self.effect:
            return self.effect(*args, **kwargs)


class StateMachine:
    """A finite state machine that manages state transitions with validation.

    The effect of a transition runs before the new state is committed, so an
    effect that raises leaves the machine in its previous state.

    Attributes:
        _state: The current state of the state machine.
        _allowed: Dictionary mapping states to their allowed transitions.
    """

    _allowed: StateGraph
    _state: Enum

    def __init__(self, initial_state: Enum, nodes_graph: StateGraph):
        """Initialize the state machine with an initial state and transition rules.

        Args:
            initial_state: The starting state for the state machine.
            nodes_graph: Dictionary mapping each state to its allowed actions.
        """
        self._state = initial_state
        self._allowed = nodes_graph

    def request_transition(self, next_state: Enum, *args, **kwargs) -> Any:
        """Request a state transition to the specified next state.

        Args:
            next_state: The target state to transition to.
            *args: Forwarded to the action's effect.
            **kwargs: Forwarded to the action's effect.

        Returns:
            The result of the transition action's effect function.

        Raises:
            IllegalTransitionError: If the transition from the current state to
                ``next_state`` is not allowed.
        """
        next_action = self._validate_transition(self.current, next_state)
        result = next_action(*args, **kwargs)
        self._state = next_action.state
        return result

    def can_transition(self, next_state: Enum) -> bool:
        """Return True when ``next_state`` is reachable in one step."""
        return any(a.state == next_state for a in self._allowed.get(self._state, ()))

    @property
    def current(self) -> Enum:
        """Get the current state of the state machine."""
        return self._state

    @property
    def terminal(self) -> bool:
        """True when no transition leaves the current state."""
        return not self._allowed.get(self._state)

    def _validate_transition(self, frm: Enum, to: Enum) -> Action:
        """Find the action that moves ``frm`` to ``to``.

        Raises:
            IllegalTransitionError: If no valid transition exists.
        """
        for action in self._allowed.get(frm, ()):
            if action.state == to:
                return action

        msg = f"Illegal transition {frm.name} -> {to.name}"
        raise IllegalTransitionError(msg)
