"""Per-day price settings."""

import logging
import math
from dataclasses import dataclass, field, replace

from milk_tracker.domain.stats import PriceConfig
from milk_tracker.services.storage import (
    BUFFALO_PRICE_KEY,
    COW_PRICE_KEY,
    KeyValueStore,
    StorageError,
)

logger = logging.getLogger(__name__)


@dataclass
class PriceService:
    """Holds the current prices and persists them on change."""

    store: KeyValueStore
    defaults: PriceConfig
    _current: PriceConfig | None = field(default=None, init=False)

    def load(self) -> PriceConfig:
        """Read persisted prices, falling back to the defaults."""
        self._current = PriceConfig(
            cow_price=self._read(COW_PRICE_KEY, self.defaults.cow_price),
            buffalo_price=self._read(BUFFALO_PRICE_KEY, self.defaults.buffalo_price),
        )
        return self._current

    @property
    def current(self) -> PriceConfig:
        """Return the active prices."""
        if self._current is None:
            return self.load()
        return self._current

    def update(
        self, cow_price: float | None = None, buffalo_price: float | None = None
    ) -> PriceConfig:
        """Change one or both prices and write both to the store.

        If the second write fails the first key is restored, so the store and
        the active prices stay in step.
        """
        previous = self.current
        prices = previous
        if cow_price is not None:
            prices = replace(prices, cow_price=_check_price(cow_price))
        if buffalo_price is not None:
            prices = replace(prices, buffalo_price=_check_price(buffalo_price))
        self.store.set(COW_PRICE_KEY, _encode(prices.cow_price))
        try:
            self.store.set(BUFFALO_PRICE_KEY, _encode(prices.buffalo_price))
        except StorageError:
            self.store.set(COW_PRICE_KEY, _encode(previous.cow_price))
            raise
        self._current = prices
        return prices

    def _read(self, key: str, default: float) -> float:
        raw = self.store.get(key)
        if not raw:
            return default
        try:
            return _check_price(float(raw))
        except ValueError:
            logger.warning("Ignoring invalid stored price for %s: %r", key, raw)
            return default


def _check_price(value: float) -> float:
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"Price must be a non-negative number, got {value}")
    return value


def _encode(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))
