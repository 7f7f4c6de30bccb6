from .charity import Charity
from .feed import DistanceAnnotatedPost, LocalFeed, NearbyCharity
from .geo import GeoPoint
from .payment import AccountLink, ConnectedAccount, Donation, PaymentIntent
from .post import Post

__all__ = [
    "AccountLink",
    "Charity",
    "ConnectedAccount",
    "DistanceAnnotatedPost",
    "Donation",
    "GeoPoint",
    "LocalFeed",
    "NearbyCharity",
    "PaymentIntent",
    "Post",
]
