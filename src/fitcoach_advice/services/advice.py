"""Advice generation pipeline."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from fitcoach_advice.domain.advice import AdviceRequest, AdviceResult
from fitcoach_advice.services.phrases import build_phrase_pool
from fitcoach_advice.services.rendering import render_advice
from fitcoach_advice.services.rng import derive_seed_key, seeded_generator
from fitcoach_advice.services.selection import select_lines
from fitcoach_advice.services.topics import filter_recent

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class AdviceService:
    """Builds coaching text from totals, goals and context.

    Every random choice in a call is drawn from one generator seeded by the
    request, so identical requests on the same UTC day produce identical text.
    """

    clock: Callable[[], datetime] = field(default=_utc_now)
    post_process: Callable[[str], str] | None = None
    debug: bool = False

    def generate(self, request: AdviceRequest) -> AdviceResult:
        """Run the full pipeline for a single request."""
        seed_key = derive_seed_key(request, self.clock().astimezone(UTC).date())
        rng = seeded_generator(seed_key)

        pool = build_phrase_pool(request, rng)
        usable = filter_recent(pool, request.context.recent_topics)
        selection = select_lines(usable, rng)
        lines, text = render_advice(selection.lines, rng)

        if self.post_process is not None:
            text = self.post_process(text)
        if self.debug:
            _logger.info(
                "Advice generated: seed_key=%s pool=%s usable=%s selected=%s",
                seed_key,
                len(pool),
                len(usable),
                len(lines),
            )
        return AdviceResult(lines=lines, topics_used=selection.topics_used, text=text)
