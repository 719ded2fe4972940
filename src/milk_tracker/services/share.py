"""Shareable monthly bill text."""

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

from milk_tracker.domain.stats import MonthSummary, format_amount

logger = logging.getLogger(__name__)

WHATSAPP_SHARE_URL = "https://wa.me/?text="


class MessageSink(Protocol):
    """Interface for a chat channel that accepts plain text."""

    async def send_message(self, chat_id: int, text: str) -> None:
        """Deliver a text message to a chat."""


def build_share_text(summary: MonthSummary) -> str:
    """Render the fixed Gujarati bill template for a month."""
    stats = summary.stats
    prices = summary.prices
    return "\n".join(
        [
            f"🥛 *દૂધનો હિસાબ - {summary.label}* 🥛",
            "",
            f"🗓 કુલ દિવસ: {stats.active_days}",
            "",
            "🐄 *ગાય:*",
            f"- દિવસ: {stats.total_cow_days}",
            f"- ભાવ: ₹{format_amount(prices.cow_price)}",
            f"- રકમ: ₹{format_amount(stats.cow_cost)}",
            "",
            "🐃 *ભેંસ:*",
            f"- દિવસ: {stats.total_buffalo_days}",
            f"- ભાવ: ₹{format_amount(prices.buffalo_price)}",
            f"- રકમ: ₹{format_amount(stats.buffalo_cost)}",
            "",
            f"💰 *કુલ બાકી રકમ: ₹{format_amount(stats.total_cost)}*",
            "",
            "(દૂધનો હિસાબ એપ દ્વારા જનરેટ કરેલ)",
        ]
    )


def whatsapp_share_url(text: str) -> str:
    """Return a WhatsApp deep link that pre-fills ``text``."""
    return WHATSAPP_SHARE_URL + quote(text, safe="")


@dataclass
class ShareService:
    """Sends the bill text to a configured chat."""

    sink: MessageSink | None
    chat_id: int | None

    @property
    def enabled(self) -> bool:
        return self.sink is not None and self.chat_id is not None

    async def send(self, summary: MonthSummary) -> str:
        """Send the bill for a month and return the delivered text."""
        if self.sink is None or self.chat_id is None:
            raise RuntimeError("No share chat is configured")
        text = build_share_text(summary)
        await self.sink.send_message(chat_id=self.chat_id, text=text)
        logger.info("Shared bill for %s", summary.label)
        return text
