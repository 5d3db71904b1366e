"""Mocked reply pool for free-form user messages."""

import random
from typing import List, Optional, Sequence

MOCK_RESPONSES: List[str] = [
    "Understood. The useful next step is to analyse the data for recurring "
    "patterns and build the strategy on top of what we find. Should we add "
    "more variables to sharpen the forecast?",
    "Interesting angle. It may be worth revisiting the original hypothesis "
    "and designing a new experiment around it. User feedback in particular "
    "could surface what we have been missing. Want a concrete plan?",
    "That idea is genuinely creative. Given the practical constraints, a "
    "staged rollout keeps the risk small. I would prioritise and start with "
    "a narrow test.",
    "The analysis suggests this approach pays off over the long term. If the "
    "architecture is designed for stability and scale from the start, it will "
    "absorb future growth in traffic.",
    "This could be the deciding factor for the project. Share it with the "
    "team, agree on a common goal, and track progress openly in your "
    "collaboration tools.",
    "Judging by the data, the current direction looks right. The market moves "
    "quickly though, so keep monitoring competitors and adjust as needed.",
    "Technically this is feasible. Performance could become an issue, so pick "
    "efficient algorithms during the initial design. Shall we validate it with "
    "a prototype first?",
    "From a UX perspective this is a strong proposal. An intuitive interface "
    "and smooth interactions raise satisfaction considerably. Let's run a user "
    "test and fold the feedback back in.",
    "For a sustainable business model, diversifying revenue looks necessary. "
    "Expanding partnerships or introducing a premium tier are both worth a "
    "look.",
    "The problem you describe seems to have several causes. A full diagnosis "
    "of the system should come first; start by digging through the logs for "
    "the bottleneck.",
]


class ResponsePool:
    """
    Picks a reply uniformly at random. Inject a seeded `random.Random`, or a
    single-item pool, to make selection deterministic.
    """

    def __init__(
        self,
        responses: Optional[Sequence[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.responses = list(responses) if responses is not None else list(MOCK_RESPONSES)
        if not self.responses:
            raise ValueError("ResponsePool needs at least one response")
        self.rng = rng or random.Random()

    def choose(self) -> str:
        return self.rng.choice(self.responses)

    def delay(self, low: float, high: float) -> float:
        """A reply delay drawn uniformly from [low, high]."""
        return self.rng.uniform(low, high)
