"""
core/menu_generator.py
────────────────────────────────────────────────────────────────────────
Retry loop around the text generator.

    PENDING → ATTEMPTING → SUCCEEDED
                 ↑   │
                 └───┴──→ EXHAUSTED   (after `max_attempts`)

Any exception from the generator and an unparseable reply cost the same:
one attempt out of a single shared budget.  Attempts run strictly one
after another and nothing partial is ever handed back: a caller gets
either a parsed `WeekMenu` or an exhausted outcome.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable

from config import settings
from core.menu_parser import parse_week_menu
from core.models.menu import WeekMenu
from services.gemini import GenerationTransportError

_LOG = logging.getLogger(__name__)

MAX_ATTEMPTS = settings.generation_max_attempts

GenerateFn = Callable[[str], Awaitable[str]]


class GenerationState(str, Enum):
    PENDING = "pending"
    ATTEMPTING = "attempting"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class AttemptFailure:
    attempt: int
    stage: str          # "transport" | "parse" | "error"
    error: str
    raw_output: str = ""


@dataclass
class GenerationOutcome:
    state: GenerationState = GenerationState.PENDING
    attempts: int = 0
    menu: WeekMenu | None = None
    failures: list[AttemptFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is GenerationState.SUCCEEDED


class MenuGenerator:
    def __init__(
        self,
        generate: GenerateFn,
        max_attempts: int = MAX_ATTEMPTS,
        backoff_s: float = 0.0,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._generate = generate
        self._max_attempts = max_attempts
        self._backoff_s = backoff_s

    async def run(self, prompt: str) -> GenerationOutcome:
        outcome = GenerationOutcome()

        while outcome.attempts < self._max_attempts:
            if outcome.attempts and self._backoff_s > 0:
                await asyncio.sleep(self._delay(outcome.attempts))

            outcome.state = GenerationState.ATTEMPTING
            outcome.attempts += 1
            failure = await self._attempt(prompt, outcome)
            if failure is None:
                outcome.state = GenerationState.SUCCEEDED
                return outcome

            outcome.failures.append(failure)
            _LOG.warning(
                "attempt %d/%d failed (%s): %s",
                failure.attempt, self._max_attempts, failure.stage, failure.error[:200],
            )

        outcome.state = GenerationState.EXHAUSTED
        _LOG.error("menu generation exhausted after %d attempts", outcome.attempts)
        return outcome

    async def _attempt(
        self, prompt: str, outcome: GenerationOutcome
    ) -> AttemptFailure | None:
        try:
            raw = await self._generate(prompt)
        except GenerationTransportError as e:
            return AttemptFailure(outcome.attempts, "transport", str(e))
        except Exception as e:
            # other providers raise their own types; same budget
            _LOG.exception("attempt %d: generator raised", outcome.attempts)
            return AttemptFailure(outcome.attempts, "error", repr(e))

        menu = parse_week_menu(raw)
        if menu is None:
            return AttemptFailure(
                outcome.attempts, "parse", "no valid weekly menu in response", raw or ""
            )
        outcome.menu = menu
        return None

    def _delay(self, attempt: int) -> float:
        # linear backoff + up to 50 % jitter
        base = self._backoff_s * attempt
        return base + random.uniform(0, base / 2)
