"""Unit tests for distance, delivery charge and address resolution."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from src.api.middleware.error_handler import UpstreamError
from src.services.geo_service import (
    FALLBACK_DISTANCE_KM,
    AddressNotFoundError,
    ChecksumAddressResolver,
    Coordinates,
    OpenRouteServiceResolver,
    delivery_charge,
    distance_between,
    get_address_resolver,
    quote_delivery,
)

ORIGIN = Coordinates(lat=51.4322, lng=6.7611)


class TestDistanceBetween:
    """Tests for the haversine distance."""

    def test_same_point_is_zero(self) -> None:
        assert distance_between(51.4322, 6.7611, 51.4322, 6.7611) == 0

    def test_is_symmetric(self) -> None:
        a = distance_between(51.4322, 6.7611, 51.2277, 6.7735)
        b = distance_between(51.2277, 6.7735, 51.4322, 6.7611)
        assert a == pytest.approx(b)

    def test_known_distance(self) -> None:
        """Duisburg to Düsseldorf is roughly 23 km in a straight line."""
        distance = distance_between(51.4322, 6.7611, 51.2277, 6.7735)
        assert 22 < distance < 24

    def test_one_degree_of_latitude(self) -> None:
        assert distance_between(0, 0, 1, 0) == pytest.approx(111.19, abs=0.01)


class TestDeliveryCharge:
    """Tests for the tiered charge."""

    @pytest.mark.parametrize(
        "distance,expected",
        [
            (0, 0.0),
            (-1, 0.0),
            (0.1, 2.00),
            (5, 2.00),
            (10, 2.00),
            (10.01, 3.00),
            (25, 3.00),
        ],
    )
    def test_tiers(self, distance: float, expected: float) -> None:
        assert delivery_charge(distance) == expected


class TestChecksumAddressResolver:
    """Tests for the deterministic stand-in resolver."""

    @pytest.mark.asyncio
    async def test_is_deterministic(self) -> None:
        resolver = ChecksumAddressResolver(ORIGIN)

        first = await resolver.resolve("Königstraße 1, Duisburg")
        second = await resolver.resolve("Königstraße 1, Duisburg")

        assert first == second

    @pytest.mark.asyncio
    async def test_offsets_origin_by_checksum_distance(self) -> None:
        resolver = ChecksumAddressResolver(ORIGIN)
        # "A" = 65 -> 2 + 65 / 10 = 8.5 km -> offset 8.5 / 111 degrees
        location = await resolver.resolve("A")

        assert location.lat == pytest.approx(ORIGIN.lat + 8.5 / 111)
        assert location.lng == pytest.approx(ORIGIN.lng + 8.5 / 111)


class TestOpenRouteServiceResolver:
    """Tests for the HTTP geocoding resolver."""

    def _mock_client(self, response: MagicMock | None = None, error: Exception | None = None) -> MagicMock:
        mock_client = MagicMock()
        if error is not None:
            mock_client.get = AsyncMock(side_effect=error)
        else:
            mock_client.get = AsyncMock(return_value=response)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=None)
        return mock_client

    @pytest.mark.asyncio
    async def test_returns_first_match_as_lat_lng(self) -> None:
        response = MagicMock()
        response.raise_for_status = MagicMock()
        response.json.return_value = {
            "features": [{"geometry": {"coordinates": [6.7735, 51.2277]}}]
        }
        mock_client = self._mock_client(response)

        with patch("src.services.geo_service.httpx.AsyncClient", return_value=mock_client):
            resolver = OpenRouteServiceResolver(api_key="key", url="https://geo.example.com")
            location = await resolver.resolve("Düsseldorf")

        assert location == Coordinates(lat=51.2277, lng=6.7735)
        params = mock_client.get.call_args.kwargs["params"]
        assert params["text"] == "Düsseldorf"
        assert params["api_key"] == "key"

    @pytest.mark.asyncio
    async def test_no_features_raises_not_found(self) -> None:
        response = MagicMock()
        response.raise_for_status = MagicMock()
        response.json.return_value = {"features": []}

        with patch("src.services.geo_service.httpx.AsyncClient", return_value=self._mock_client(response)):
            resolver = OpenRouteServiceResolver(api_key="key", url="https://geo.example.com")
            with pytest.raises(AddressNotFoundError):
                await resolver.resolve("Nowhere")

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_error(self) -> None:
        mock_client = self._mock_client(error=httpx.TimeoutException("slow"))

        with patch("src.services.geo_service.httpx.AsyncClient", return_value=mock_client):
            resolver = OpenRouteServiceResolver(api_key="key", url="https://geo.example.com")
            with pytest.raises(UpstreamError):
                await resolver.resolve("Duisburg")


class TestGetAddressResolver:
    """Tests for resolver selection from settings."""

    def _settings(self, provider: str, api_key: str = "") -> MagicMock:
        settings = MagicMock()
        settings.geocoding_provider = provider
        settings.geocoding_api_key = api_key
        settings.geocoding_url = "https://geo.example.com"
        settings.geocoding_timeout_seconds = 5.0
        settings.restaurant_lat = ORIGIN.lat
        settings.restaurant_lng = ORIGIN.lng
        return settings

    def test_default_is_checksum(self) -> None:
        assert isinstance(get_address_resolver(self._settings("checksum")), ChecksumAddressResolver)

    def test_openrouteservice_with_key(self) -> None:
        resolver = get_address_resolver(self._settings("openrouteservice", api_key="k"))
        assert isinstance(resolver, OpenRouteServiceResolver)

    def test_openrouteservice_without_key_falls_back(self) -> None:
        resolver = get_address_resolver(self._settings("openrouteservice"))
        assert isinstance(resolver, ChecksumAddressResolver)


class TestQuoteDelivery:
    """Tests for the fallback-aware quote."""

    @pytest.mark.asyncio
    async def test_resolved_address(self) -> None:
        resolver = MagicMock()
        resolver.resolve = AsyncMock(return_value=Coordinates(lat=ORIGIN.lat + 0.03, lng=ORIGIN.lng))

        quote = await quote_delivery("Some Street 1", resolver, ORIGIN)

        assert quote.distance == pytest.approx(3.34, abs=0.01)
        assert quote.delivery_charge == 2.00
        assert quote.fallback is False

    @pytest.mark.asyncio
    async def test_far_address_uses_high_tier(self) -> None:
        resolver = MagicMock()
        resolver.resolve = AsyncMock(return_value=Coordinates(lat=ORIGIN.lat + 0.2, lng=ORIGIN.lng))

        quote = await quote_delivery("Far Away 9", resolver, ORIGIN)

        assert quote.distance > 10
        assert quote.delivery_charge == 3.00

    @pytest.mark.asyncio
    async def test_resolver_failure_uses_fallback(self) -> None:
        resolver = MagicMock()
        resolver.resolve = AsyncMock(side_effect=AddressNotFoundError("???"))

        quote = await quote_delivery("???", resolver, ORIGIN)

        assert quote.distance == FALLBACK_DISTANCE_KM
        assert quote.delivery_charge == 2.00
        assert quote.fallback is True

    @pytest.mark.asyncio
    async def test_blank_address_uses_fallback_without_resolving(self) -> None:
        resolver = MagicMock()
        resolver.resolve = AsyncMock()

        quote = await quote_delivery("   ", resolver, ORIGIN)

        assert quote.distance == FALLBACK_DISTANCE_KM
        resolver.resolve.assert_not_called()
