"""
Optional one-sentence explanations of sales trends from a chat model.
Explanations are decoration for dashboards: a failed call yields no text and
never affects the numbers they accompany.
"""

import logging

from openai import AsyncOpenAI

from models.enums import Trend
from models.forecast import ForecastResult
from utils.openai_utils import first_message_text, safe_chat_completion

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    'Analyze the sales trend for the product "{product_name}". '
    "Daily sales are {direction} with a slope of {slope:.2f} units/day. "
    "Reply with a SINGLE short sentence (max 15 words) suggesting a plausible reason "
    "for this trend, such as seasonality, holidays or weather."
)


class TrendExplainer:
    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = "gpt-4o-mini",
        max_tokens: int = 100,
        temperature: float = 0.7,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def explain(self, forecast: ForecastResult, product_name: str) -> str | None:
        """Return an explanation for UP/DOWN forecasts, None otherwise or on failure."""
        if forecast.trend not in (Trend.UP, Trend.DOWN):
            return None
        prompt = PROMPT_TEMPLATE.format(
            product_name=product_name,
            direction="increasing" if forecast.trend == Trend.UP else "decreasing",
            slope=forecast.slope,
        )
        try:
            completion = await safe_chat_completion(
                self.client,
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                logger=logger,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            logger.error(f"Trend explanation failed for {forecast.product_id}: {e}")
            return None
        return first_message_text(completion) or None
