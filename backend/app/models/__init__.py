from app.models.agency import Agency, User
from app.models.contact import Contact
from app.models.trip import Trip, TripReferenceSequence, TripTraveler
from app.models.itinerary import Itinerary, ItineraryDay
from app.models.activity import (
    Activity,
    ActivityPricing,
    CommissionTracking,
    ExpectedPaymentItem,
    PaymentScheduleConfig,
    PaymentTransaction,
)
from app.models.finance import ExchangeRate, ServiceFee, TravelerSplit
from app.models.notification import Notification

__all__ = [
    "Activity",
    "ActivityPricing",
    "Agency",
    "CommissionTracking",
    "Contact",
    "ExchangeRate",
    "ExpectedPaymentItem",
    "Itinerary",
    "ItineraryDay",
    "Notification",
    "PaymentScheduleConfig",
    "PaymentTransaction",
    "ServiceFee",
    "TravelerSplit",
    "Trip",
    "TripReferenceSequence",
    "TripTraveler",
    "User",
]
