import logging

from .config import Config
from .provider.client import create_client
from .tools.analytics import AnalyticsTools
from .tools.transfers import TransferTools
from .tools.trips import TripTools

logger = logging.getLogger(__name__)


class TravelService(TripTools, TransferTools, AnalyticsTools):
    """Every tool handler, bound to one provider client.

    The client is injected: an AmadeusClient for live calls or a
    MockAmadeusClient when credentials are missing.
    """

    @classmethod
    def from_config(cls, allow_mock: bool = True, **kwargs) -> "TravelService":
        client = create_client(
            Config.AMADEUS_CLIENT_ID,
            Config.AMADEUS_CLIENT_SECRET,
            environment=Config.AMADEUS_ENVIRONMENT,
            allow_mock=allow_mock,
        )
        logger.info(f"Travel service ready (environment: {client.environment})")
        return cls(client, **kwargs)
