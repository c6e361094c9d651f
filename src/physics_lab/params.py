# MIT License (see LICENSE)
"""
Parameter stores and the one-directional SetParameter command queue.

Every simulator keeps its configuration in a ``@dataclass`` whose class
attributes ``BOUNDS`` (numeric ranges) and ``CHOICES`` (allowed strings)
describe what a collaborator may write. UI code never assigns fields; it
submits ``SetParameter(name, value)`` commands that are drained at the
start of the next tick, so a Stepper always sees an unchanging parameter
set for the whole call.

Parsing rules (applied when a command is drained):
    - Strings are parsed as numbers for numeric fields.
    - Unparsable or non-finite input keeps the previous value (WARNING log).
    - Numbers outside ``BOUNDS`` are clamped (WARNING log).
    - Booleans accept bools, 0/1 and "true"/"false"/"on"/"off"/"yes"/"no".

Validation done at submission (raises ValueError immediately):
    - Unknown parameter name.
    - A string field given a value outside ``CHOICES``.
"""
from __future__ import annotations
import dataclasses
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Iterator

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "on", "yes"}
_FALSE = {"0", "false", "off", "no", ""}


@dataclass(frozen=True)
class Bound:
    """
    Closed numeric range for a parameter.

    Attributes:
        minimum: Smallest accepted value.
        maximum: Largest accepted value.
        integer: Round to the nearest integer after clamping.
    """
    minimum: float = -math.inf
    maximum: float = math.inf
    integer: bool = False

    def apply(self, value: float) -> float:
        v = min(max(value, self.minimum), self.maximum)
        if self.integer:
            v = float(round(v))
        return v


@dataclass(frozen=True)
class SetParameter:
    """A request from a UI collaborator to change one named parameter."""
    name: str
    value: Any


def coerce_float(raw: Any, fallback: float) -> tuple[float, bool]:
    """
    Parse a user value as a finite float.

    Returns:
        (value, ok). On failure ``value`` is ``fallback`` and ``ok`` is False.
    """
    if isinstance(raw, bool):
        return float(raw), True
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        return fallback, False
    if not math.isfinite(value):
        return fallback, False
    return value, True


def coerce_bool(raw: Any, fallback: bool) -> tuple[bool, bool]:
    """Parse a user value as a boolean flag. Returns (value, ok)."""
    if isinstance(raw, bool):
        return raw, True
    if isinstance(raw, (int, float)) and math.isfinite(raw):
        return bool(raw), True
    if isinstance(raw, str):
        s = raw.strip().lower()
        if s in _TRUE:
            return True, True
        if s in _FALSE:
            return False, True
    return fallback, False


def field_names(params: Any) -> tuple[str, ...]:
    return tuple(f.name for f in dataclasses.fields(params))


def validate_parameter(params: Any, name: str, value: Any) -> None:
    """
    Reject commands that can never be applied.

    Raises:
        ValueError: Unknown field, or a value outside the field's CHOICES.
    """
    if name not in field_names(params):
        raise ValueError(
            f"Unknown parameter '{name}' for {type(params).__name__} "
            f"(expected one of {sorted(field_names(params))})"
        )
    choices = getattr(params, "CHOICES", {}).get(name)
    if choices is not None and str(value).lower() not in choices:
        raise ValueError(f"Invalid value '{value}' for '{name}' (expected one of {list(choices)})")


def apply_parameter(params: Any, name: str, raw: Any) -> bool:
    """
    Parse, clamp and assign one parameter on a params dataclass.

    Returns:
        True if the stored value changed.
    """
    validate_parameter(params, name, raw)
    current = getattr(params, name)

    if isinstance(current, bool):
        value, ok = coerce_bool(raw, current)
    elif isinstance(current, (int, float)):
        value, ok = coerce_float(raw, float(current))
        if ok:
            bound = getattr(params, "BOUNDS", {}).get(name)
            if bound is not None:
                clamped = bound.apply(value)
                if clamped != value:
                    logger.warning("%s.%s=%r clamped to %r", type(params).__name__, name, value, clamped)
                value = clamped
        if isinstance(current, int):
            value = int(round(value))
    else:
        value, ok = str(raw).lower(), True

    if not ok:
        logger.warning("%s.%s: rejected %r, keeping %r", type(params).__name__, name, raw, current)
        return False
    if value == current:
        return False
    setattr(params, name, value)
    logger.debug("%s.%s: %r -> %r", type(params).__name__, name, current, value)
    return True


class CommandQueue:
    """
    FIFO of pending SetParameter commands for one parameter store.

    Commands are validated on submit and applied in order on drain().
    """

    def __init__(self, params: Any):
        self.params = params
        self._pending: deque[SetParameter] = deque()

    def submit(self, name: str, value: Any) -> SetParameter:
        validate_parameter(self.params, name, value)
        cmd = SetParameter(name, value)
        self._pending.append(cmd)
        return cmd

    def drain(self, on_change: Callable[[str], None] | None = None) -> list[str]:
        """
        Apply every pending command.

        Args:
            on_change: Called with the field name after each effective change.

        Returns:
            Names of fields whose value changed, in application order.
        """
        changed: list[str] = []
        while self._pending:
            cmd = self._pending.popleft()
            if apply_parameter(self.params, cmd.name, cmd.value):
                changed.append(cmd.name)
                if on_change is not None:
                    on_change(cmd.name)
        return changed

    def clear(self) -> None:
        self._pending.clear()

    def __len__(self) -> int:
        return len(self._pending)

    def __iter__(self) -> Iterator[SetParameter]:
        return iter(self._pending)
