from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

import api.remote
from utils.logger import get_logger

_logger = get_logger(__name__)

SellerVerifier = Callable[[str], Awaitable[bool]]


async def _default_verifier(seller_id: str) -> bool:
    # looked up at call time so tests can patch api.remote
    return await api.remote.verify_seller(seller_id)


@dataclass
class GlobalState:
    """
    Application state shared by screens.

    Fields:
      - seller_id: id of the operator, from --seller-id, SELLER_ID or the login screen
      - verified: result of the last verification of seller_id
      - verifier: async capability answering "is this seller logged in?"
    """

    seller_id: Optional[str] = None
    verified: bool = False
    verifier: SellerVerifier = field(default=_default_verifier, repr=False)

    async def verify(self) -> bool:
        """Check the current seller id against the backend and remember the answer."""
        if not self.seller_id:
            self.verified = False
            return False
        self.verified = bool(await self.verifier(self.seller_id))
        _logger.info(f"Seller {self.seller_id} verified: {self.verified}")
        return self.verified

    def end_session(self) -> None:
        """Forget the seller. Called on logout and when verification fails."""
        self.seller_id = None
        self.verified = False
