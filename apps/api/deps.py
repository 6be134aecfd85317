"""FastAPI dependencies."""

from db.gateway import SqlAlchemyPricingGateway
from db.session import get_session_factory
from services.pricing_service import PricingService


def get_pricing_service() -> PricingService:
    """Pricing service backed by the configured database."""
    return PricingService(SqlAlchemyPricingGateway(get_session_factory()))
