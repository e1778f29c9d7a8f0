"""Free-text insight over journal statistics via the Anthropic API.

Sends the top single-factor and pair results plus a small trade sample
to Claude and returns its commentary.  Purely optional: without an API
key, or when the call fails, a fixed message comes back instead and the
analytics are unaffected.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

import anthropic

from ..core.config import InsightConfig
from .factor_analysis import AnalysisResult, PairAnalysisResult
from .record import Trade

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "API key not configured in environment variables."
FAILURE_MESSAGE = (
    "Failed to generate insights. Please check your API key or try again later."
)
EMPTY_MESSAGE = "No insight generated."

_INSIGHT_TEMPLATE = """\
You are a senior quantitative trading analyst. Analyze this summary data from a user's trading journal.

**Dataset Overview:**
- Total Trades: {total}
- Recent Trades Sample: {sample}

**Statistical Edge (Single Factors):**
{single}

**Combinatorial Edge (Best Pairs):**
{pairs}

**Task:**
1. Identify the strongest edge based on MFE (Max Favorable Excursion) vs MAE (Max Adverse Excursion).
2. Suggest a strategy refinement based on the best pairs.
3. Comment on the consistency of the recent trades.

Keep it concise, professional, and actionable. Use bullet points.
"""

_NOTE_TEMPLATE = """\
You are a professional trading journal assistant. Write a concise, 1-2 sentence note for a trade based on the following technical data.
Focus on the "why" and the outcome context. Do not use markdown.

**Trade Data:**
- Direction: {direction}
- Strategies: {strategies}
- Confluence Levels: {levels}
- Entry Type: {entry_type}
- Delta (Aggression): {delta} (High Delta > 7, Extreme > 20)
- Result: MFE {mfe}% / MAE {mae}%
"""


class InsightGenerator:
    """Builds prompts from aggregate results and asks Claude for commentary.

    Parameters
    ----------
    config : InsightConfig | None
        Model, token budget and API-key environment variable.
    client : anthropic.Anthropic | None
        Pre-built client; created from the configured key when omitted.
    top_n : int
        How many single-factor and pair rows go into the prompt.
    sample_size : int
        How many trades go into the "recent trades" sample.
    """

    def __init__(
        self,
        config: InsightConfig | None = None,
        *,
        client: Any | None = None,
        top_n: int = 3,
        sample_size: int = 5,
    ) -> None:
        self._config = config or InsightConfig()
        self._client = client
        self._top_n = top_n
        self._sample_size = sample_size

    # ------------------------------------------------------------------
    # Prompt construction
    # ------------------------------------------------------------------

    def build_insight_prompt(
        self,
        single: Sequence[AnalysisResult],
        pairs: Sequence[PairAnalysisResult],
        trades: Sequence[Trade],
    ) -> str:
        sample = [
            {
                "strategy": ", ".join(t.strategy_names),
                "mfe": t.mfe,
                "mae": t.mae,
                "delta": t.delta,
                "entry": t.entry_type,
            }
            for t in trades[: self._sample_size]
        ]
        return _INSIGHT_TEMPLATE.format(
            total=len(trades),
            sample=json.dumps(sample),
            single=json.dumps([r.to_dict() for r in single[: self._top_n]]),
            pairs=json.dumps([r.to_dict() for r in pairs[: self._top_n]]),
        )

    def build_note_prompt(self, trade: Trade) -> str:
        return _NOTE_TEMPLATE.format(
            direction=trade.direction.value,
            strategies=", ".join(trade.strategy_names),
            levels=", ".join(trade.active_levels),
            entry_type=trade.entry_type,
            delta=trade.delta,
            mfe=trade.mfe,
            mae=trade.mae,
        )

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate_insight(
        self,
        single: Sequence[AnalysisResult],
        pairs: Sequence[PairAnalysisResult],
        trades: Sequence[Trade],
    ) -> str:
        """Commentary on the journal's strongest edges."""
        client = self._get_client()
        if client is None:
            return NOT_CONFIGURED_MESSAGE

        prompt = self.build_insight_prompt(single, pairs, trades)
        try:
            text = self._call(client, prompt)
        except anthropic.APIError:
            logger.exception("Insight generation failed")
            return FAILURE_MESSAGE
        return text or EMPTY_MESSAGE

    def generate_trade_note(self, trade: Trade) -> str:
        """Short note for one trade; empty string when unavailable."""
        client = self._get_client()
        if client is None:
            return ""
        try:
            return self._call(client, self.build_note_prompt(trade)).strip()
        except anthropic.APIError:
            logger.exception("Trade note generation failed for %s", trade.id)
            return ""

    def _get_client(self) -> Any | None:
        if self._client is None:
            api_key = self._config.api_key
            if not api_key:
                logger.warning(
                    "%s not set, skipping insight generation", self._config.api_key_env
                )
                return None
            self._client = anthropic.Anthropic(api_key=api_key)
        return self._client

    def _call(self, client: Any, prompt: str) -> str:
        response = client.messages.create(
            model=self._config.model,
            max_tokens=self._config.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
