"""AI-written monthly summary in Gujarati."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from milk_tracker.domain.records import DailyRecord, MilkKind
from milk_tracker.domain.stats import PriceConfig, format_amount

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a smart assistant for a Gujarati household milk tracker app. "
    "Your role is to analyze the milk collection data (Yes/No records) and "
    "provide a summary in GUJARATI language only. "
    'You should calculate the total estimated bill based on the "Price Per Day" '
    "provided. If there are reasons mentioned for not taking milk, summarize "
    "them as well. Be polite, helpful and concise."
)
NO_ANSWER_MESSAGE = "માફ કરશો, હું માહિતી લાવી શક્યો નથી."
ERROR_MESSAGE = (
    "એઆઈ સાથે કનેક્ટ કરવામાં ભૂલ આવી છે. કૃપા કરીને થોડી વાર પછી પ્રયત્ન કરો."
)

_KIND_LABELS = {MilkKind.COW: "ગાય", MilkKind.BUFFALO: "ભેંસ"}


class TextGenerationClient(Protocol):
    """Interface for a free-text generation service."""

    async def generate(self, *, model: str, instructions: str, prompt: str) -> str:
        """Return the generated text for a prompt."""


def build_prompt(records: list[DailyRecord], prices: PriceConfig, label: str) -> str:
    """Describe a month's records and prices as a Gujarati prompt."""
    lines = "\n".join(_describe_record(record) for record in records)
    return (
        f"અહીં {label} મહિના માટે દૂધનો હિસાબ (હા/ના) છે:\n\n"
        f"{lines}\n\n"
        "ભાવ (રોજનો ફિક્સ ભાવ):\n"
        f"- ગાયનું દૂધ: ₹{format_amount(prices.cow_price)}/દિવસ\n"
        f"- ભેંસનું દૂધ: ₹{format_amount(prices.buffalo_price)}/દિવસ\n\n"
        "મહેરબાની કરીને મને નીચેની વિગતો ગુજરાતીમાં જણાવો:\n"
        "1. ગાયનું દૂધ કેટલા દિવસ લીધું?\n"
        "2. ભેંસનું દૂધ કેટલા દિવસ લીધું?\n"
        "3. ગાય અને ભેંસ બંનેનું મળીને કુલ અનુમાનિત બિલ.\n"
        "4. દૂધ ન લેવાના મુખ્ય કારણો (જો કોઈ હોય તો).\n"
        "5. અન્ય કોઈ મહત્વની નોંધ.\n\n"
        "જવાબ માત્ર ગુજરાતી ભાષામાં જ આપો."
    )


def _describe_record(record: DailyRecord) -> str:
    parts = []
    for kind in MilkKind:
        if record.received(kind):
            parts.append(f"{_KIND_LABELS[kind]}: હા")
            continue
        reason = record.visible_reason(kind)
        suffix = f" (કારણ: {reason})" if reason else ""
        parts.append(f"{_KIND_LABELS[kind]}: ના{suffix}")
    return f"{record.date}: {', '.join(parts)}"


@dataclass
class SummarySlot:
    """Display slot that only accepts the answer to the newest request."""

    text: str = ""
    _latest: int = 0

    def begin(self) -> int:
        """Start a request and return its token."""
        self._latest += 1
        return self._latest

    def apply(self, token: int, text: str) -> bool:
        """Show ``text`` if ``token`` is still the newest request."""
        if token != self._latest:
            return False
        self.text = text
        return True

    def clear(self) -> None:
        """Empty the slot and discard any request still in flight."""
        self._latest += 1
        self.text = ""


@dataclass(frozen=True)
class SummaryOutcome:
    """Result of a summary request."""

    token: int
    text: str
    applied: bool


@dataclass
class SummaryService:
    """Asks the text-generation service for a month summary."""

    client: TextGenerationClient
    model: str
    slot: SummarySlot = field(default_factory=SummarySlot)

    async def summarize(
        self, records: list[DailyRecord], prices: PriceConfig, label: str
    ) -> str:
        """Return the service's text, or a fixed fallback. Never raises."""
        try:
            text = await self.client.generate(
                model=self.model,
                instructions=SYSTEM_PROMPT,
                prompt=build_prompt(records, prices, label),
            )
        except Exception:
            logger.exception("Summary generation failed for %s", label)
            return ERROR_MESSAGE
        return text or NO_ANSWER_MESSAGE

    async def request(
        self, records: list[DailyRecord], prices: PriceConfig, label: str
    ) -> SummaryOutcome:
        """Generate a summary and show it unless a newer request started."""
        token = self.slot.begin()
        text = await self.summarize(records, prices, label)
        applied = self.slot.apply(token, text)
        if not applied:
            logger.info("Discarded stale summary response %s", token)
        return SummaryOutcome(token=token, text=text, applied=applied)
