# Contract tests for location resolution, city search and air quality normalization.

import pytest

from conftest import FakeProvider, air_quality_reading, london_geocode
from gateway.core.errors import LocationNotFound, NoAirQualityData, UpstreamUnavailable
from gateway.providers.base import AddressComponent, AirQualityReading, GeocodeResult, PlaceResult
from gateway.services.air_quality_service import AirQualityService, classify_category
from gateway.services.location_service import LocationService, extract_place, parse_coordinates


class TestParseCoordinates:
    def test_lat_lng_pair(self):
        assert parse_coordinates("51.5, -0.12") == (51.5, -0.12)

    @pytest.mark.parametrize("query", ["London", "Paris, France", ""])
    def test_place_names(self, query):
        assert parse_coordinates(query) is None


class TestExtractPlace:
    def test_locality_and_country_short_name(self):
        assert extract_place(london_geocode()) == ("London", "GB")

    def test_falls_back_to_region_then_unknown(self):
        """City falls back to the first-level region, then to Unknown.

        Implementation: Builds results without a locality component.
        Passing implies: Rural or oddly-shaped addresses still resolve.
        """
        region_only = GeocodeResult(
            lat=0,
            lng=0,
            components=[AddressComponent("Bavaria", "BY", ["administrative_area_level_1"])],
        )
        assert extract_place(region_only) == ("Bavaria", "Unknown")
        assert extract_place(GeocodeResult(lat=0, lng=0)) == ("Unknown", "Unknown")


class TestLocationService:
    @pytest.mark.asyncio
    async def test_resolves_name(self, provider):
        location = await LocationService(provider).resolve("London")

        assert location.city == "London"
        assert location.country == "GB"
        assert location.lat == 51.5074
        assert provider.calls == ["geocode:London"]

    @pytest.mark.asyncio
    async def test_coordinate_query_reverse_geocodes(self, provider):
        """A "lat,lng" query goes through reverse geocoding and keeps the requested point.

        Implementation: Resolves a coordinate string against a provider returning London.
        Passing implies: Coordinates are never forward-geocoded as a name.
        """
        location = await LocationService(provider).resolve("51.5,-0.1")

        assert provider.calls == ["reverse_geocode:51.5,-0.1"]
        assert (location.lat, location.lng) == (51.5, -0.1)
        assert location.city == "London"

    @pytest.mark.asyncio
    async def test_no_result_is_not_found(self):
        with pytest.raises(LocationNotFound):
            await LocationService(FakeProvider(geocode=None)).resolve("Atlantis")

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self):
        service = LocationService(FakeProvider(error=UpstreamUnavailable("boom")))
        with pytest.raises(UpstreamUnavailable):
            await service.resolve("London")

    @pytest.mark.asyncio
    async def test_search_returns_at_most_five(self):
        places = [PlaceResult(name=f"Springfield {i}", lat=i, lng=-i) for i in range(8)]
        service = LocationService(FakeProvider(places=places))

        suggestions = await service.search("Springfield")

        assert len(suggestions) == 5
        assert suggestions[0].name == "Springfield 0"
        assert suggestions[1].location.lng == -1


class TestAirQuality:
    @pytest.mark.parametrize(
        ("category", "status"),
        [
            ("Good air quality", "Good"),
            ("Moderate air quality", "Moderate"),
            ("Unhealthy for sensitive groups", "Unhealthy for Sensitive Groups"),
            ("Very unhealthy air quality", "Very Unhealthy"),
            ("HAZARDOUS", "Hazardous"),
        ],
    )
    def test_known_categories(self, category, status):
        assert classify_category(category)[0] == status

    def test_unknown_category_passes_through(self):
        """Unrecognized categories are kept verbatim with a generated description.

        Implementation: Classifies a category outside the table.
        Passing implies: New provider wording never fails the request.
        """
        assert classify_category("Low air pollution") == (
            "Low air pollution",
            "Air quality is low air pollution",
        )

    @pytest.mark.asyncio
    async def test_sample_from_first_index(self, london):
        sample = await AirQualityService(FakeProvider(air=air_quality_reading())).get_air_quality(london)

        assert sample.aqi == 72
        assert sample.status == "Good"
        assert sample.category == "Good air quality"
        assert sample.estimated is False
        assert sample.pollutants[0].concentration.value == 8.2
        assert sample.coordinates.lat == london.lat

    @pytest.mark.asyncio
    async def test_empty_index_list(self, london):
        service = AirQualityService(FakeProvider(air=AirQualityReading()))
        with pytest.raises(NoAirQualityData):
            await service.get_air_quality(london)
