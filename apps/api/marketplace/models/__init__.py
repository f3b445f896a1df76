# Import SQLAlchemy models so they register on Base.metadata
from marketplace.models.bid import Bid, BidStatus  # noqa: F401
from marketplace.models.brand import Brand  # noqa: F401
from marketplace.models.category import Category  # noqa: F401
from marketplace.models.listing import Listing  # noqa: F401
from marketplace.models.logistics import Logistics, LogisticsStatus  # noqa: F401
from marketplace.models.offer import Offer, OfferStatus  # noqa: F401
from marketplace.models.product import Product  # noqa: F401
from marketplace.models.requirement import ApprovalStatus, Requirement  # noqa: F401
from marketplace.models.unit import Unit  # noqa: F401
