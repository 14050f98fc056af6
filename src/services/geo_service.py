"""Distance, delivery-charge and address resolution helpers.

``distance_between`` and ``delivery_charge`` are pure functions. Address
resolution sits behind the ``AddressResolver`` protocol so the deterministic
stand-in can be swapped for a real geocoding provider via configuration.
"""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

import httpx

from src.api.middleware.error_handler import UpstreamError
from src.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = 111.0

LOW_TIER_MAX_KM = 10.0
LOW_TIER_CHARGE = 2.00
HIGH_TIER_CHARGE = 3.00

# Used when delivery is selected but the address cannot be resolved
FALLBACK_DISTANCE_KM = 8.0


class AddressNotFoundError(UpstreamError):
    """The geocoding provider returned no match for an address."""

    def __init__(self, address: str) -> None:
        super().__init__(message=f"Address not found: {address}")
        self.address = address


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class DeliveryQuote:
    """Distance and charge for a delivery address."""

    distance: float
    delivery_charge: float
    fallback: bool = False


def distance_between(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle (haversine) distance in kilometers."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def delivery_charge(distance_km: float) -> float:
    """Tiered delivery charge for a distance.

    Up to 10 km costs the low tier, anything further the high tier.
    Non-positive distances are free.
    """
    if distance_km <= 0:
        return 0.0
    if distance_km <= LOW_TIER_MAX_KM:
        return LOW_TIER_CHARGE
    return HIGH_TIER_CHARGE


class AddressResolver(Protocol):
    """Resolves free-text addresses to coordinates."""

    async def resolve(self, address: str) -> Coordinates:
        """Return the best-match coordinate or raise AddressNotFoundError."""
        ...


class ChecksumAddressResolver:
    """Deterministic placeholder resolver.

    Derives a pseudo-distance in [2, 15) km from the character-code sum of
    the address and offsets the restaurant coordinate by it. The result is
    stable for a given string but not geographically meaningful.
    """

    def __init__(self, origin: Coordinates) -> None:
        self.origin = origin

    async def resolve(self, address: str) -> Coordinates:
        checksum = sum(ord(char) for char in address)
        distance_km = 2 + (checksum % 130) / 10
        offset = distance_km / KM_PER_DEGREE
        return Coordinates(lat=self.origin.lat + offset, lng=self.origin.lng + offset)


class OpenRouteServiceResolver:
    """Geocoding via the OpenRouteService search API."""

    def __init__(self, api_key: str, url: str, timeout: float = 10.0) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    async def resolve(self, address: str) -> Coordinates:
        """Look up an address.

        Raises:
            AddressNotFoundError: If the provider has no match.
            UpstreamError: If the request fails or the response is malformed.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.url,
                    params={"api_key": self.api_key, "text": address, "size": 1},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            raise UpstreamError("Geocoding request timed out") from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Geocoding request failed: {e}") from e
        except ValueError as e:
            raise UpstreamError("Geocoding provider returned invalid JSON") from e

        features = data.get("features") or []
        if not features:
            raise AddressNotFoundError(address)

        try:
            # GeoJSON coordinates are [lng, lat]
            lng, lat = features[0]["geometry"]["coordinates"][:2]
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError("Geocoding provider returned an unexpected payload") from e

        return Coordinates(lat=float(lat), lng=float(lng))


def restaurant_location(settings: Settings | None = None) -> Coordinates:
    """Fixed coordinate deliveries are measured from."""
    settings = settings or get_settings()
    return Coordinates(lat=settings.restaurant_lat, lng=settings.restaurant_lng)


def get_address_resolver(settings: Settings | None = None) -> AddressResolver:
    """Build the resolver selected by GEOCODING_PROVIDER."""
    settings = settings or get_settings()
    provider = settings.geocoding_provider.lower()

    if provider == "openrouteservice":
        if not settings.geocoding_api_key:
            logger.warning("GEOCODING_API_KEY not set; falling back to checksum resolver")
        else:
            return OpenRouteServiceResolver(
                api_key=settings.geocoding_api_key,
                url=settings.geocoding_url,
                timeout=settings.geocoding_timeout_seconds,
            )
    elif provider != "checksum":
        logger.warning("Unknown geocoding provider %r; using checksum resolver", provider)

    return ChecksumAddressResolver(restaurant_location(settings))


def fallback_quote() -> DeliveryQuote:
    return DeliveryQuote(
        distance=FALLBACK_DISTANCE_KM,
        delivery_charge=delivery_charge(FALLBACK_DISTANCE_KM),
        fallback=True,
    )


async def quote_delivery(
    address: str | None,
    resolver: AddressResolver,
    origin: Coordinates,
) -> DeliveryQuote:
    """Compute distance and charge for a delivery address.

    A blank address or any resolver failure yields the fixed fallback
    distance; the failure is logged and never raised.

    Args:
        address: Customer address text.
        resolver: Address resolver to use.
        origin: Restaurant coordinate.

    Returns:
        DeliveryQuote: Distance (km) and charge.
    """
    if not address or not address.strip():
        logger.warning("Delivery selected without an address, using default charge")
        return fallback_quote()

    try:
        location = await resolver.resolve(address)
    except Exception as e:
        logger.error("Error calculating distance for %r: %s", address, e)
        return fallback_quote()

    distance = distance_between(origin.lat, origin.lng, location.lat, location.lng)
    charge = delivery_charge(distance)
    logger.info("Distance: %.2f km, Delivery Charge: %.2f", distance, charge)
    return DeliveryQuote(distance=distance, delivery_charge=charge)
