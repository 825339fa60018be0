"""Single-owner view state with last-request-wins updates."""

import logging

from cryptotracker.market.snapshot import MarketService
from cryptotracker.models import MarketState


logger = logging.getLogger(__name__)


class MarketView:
    """Holds the active symbol and the market state shown for it.

    Every ``select`` call takes a new request token. A result is applied
    only while its token is still the latest one, so a slow response for
    an earlier symbol never overwrites the state of a newer request.
    In-flight requests are not cancelled at the transport level.
    """

    def __init__(self, service: MarketService, symbol: str = "BTC"):
        self.service = service
        self.state = MarketState.loading(symbol.strip().upper())
        self._token = 0

    @property
    def symbol(self) -> str:
        return self.state.symbol

    @property
    def token(self) -> int:
        return self._token

    def begin(self, symbol: str) -> int:
        """Start a new request for ``symbol`` and return its token."""
        self._token += 1
        self.state = MarketState.loading(symbol.strip().upper())
        return self._token

    def is_current(self, token: int) -> bool:
        """Whether ``token`` belongs to the latest request."""
        return token == self._token

    async def select(self, symbol: str) -> bool:
        """Switch to ``symbol`` and load its market state.

        Args:
            symbol: Ticker text.

        Returns:
            True if the loaded state was applied, False if a newer
            request superseded this one.
        """
        token = self.begin(symbol)
        try:
            state = await self.service.load(symbol)
        except Exception:
            logger.exception("Loading market state for %s failed", symbol)
            state = MarketState.unavailable(symbol.strip().upper())

        if not self.is_current(token):
            logger.debug("Discarding stale market state for %s (token %s)", state.symbol, token)
            return False

        self.state = state
        return True
