"""Tests for the USGS feed client and the Earthquake model."""

import asyncio
from datetime import datetime, timezone

import httpx
import pytest

from quake_map.exceptions import FeedError, FeedFormatError
from quake_map.models import Earthquake
from quake_map.usgs_client import FEEDS, feed_url, fetch_feed, parse_features

SAMPLE_GEOJSON = {
    "type": "FeatureCollection",
    "metadata": {"count": 2},
    "features": [
        {
            "type": "Feature",
            "id": "us7000test1",
            "properties": {
                "mag": 4.5,
                "place": "10km NE of Somewhere",
                "time": 1700000000000,
                "url": "https://earthquake.usgs.gov/earthquakes/eventpage/us7000test1",
            },
            "geometry": {"type": "Point", "coordinates": [-118.5, 34.0, 10.0]},
        },
        {
            "type": "Feature",
            "id": "us7000test2",
            "properties": {
                "mag": None,
                "place": None,
                "time": 1699999000000,
                "url": None,
            },
            "geometry": {"type": "Point", "coordinates": [-117.2, 33.5, -0.5]},
        },
    ],
}

URL = FEEDS["week"]


def _fetch(url=URL):
    async def go():
        async with httpx.AsyncClient() as client:
            return await fetch_feed(client, url)
    return asyncio.run(go())


class TestEarthquakeModel:
    def test_from_geojson_feature(self):
        quake = Earthquake.from_geojson_feature(SAMPLE_GEOJSON["features"][0])
        assert quake.id == "us7000test1"
        assert quake.magnitude == 4.5
        assert quake.place == "10km NE of Somewhere"
        assert quake.longitude == -118.5
        assert quake.latitude == 34.0
        assert quake.depth == 10.0
        assert quake.time == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_null_members_get_defaults(self):
        quake = Earthquake.from_geojson_feature(SAMPLE_GEOJSON["features"][1])
        assert quake.magnitude == 0.0
        assert quake.place == "Unknown"
        assert quake.url == ""
        # raw depth is kept; clamping happens when coloring
        assert quake.depth == -0.5

    def test_missing_coordinates_raises(self):
        feature = {"id": "bad", "properties": {"mag": 1.0, "time": 0}, "geometry": None}
        with pytest.raises(FeedFormatError, match="bad"):
            Earthquake.from_geojson_feature(feature)

    def test_short_coordinates_raises(self):
        feature = {
            "id": "flat",
            "properties": {"mag": 1.0, "time": 0},
            "geometry": {"type": "Point", "coordinates": [1.0, 2.0]},
        }
        with pytest.raises(FeedFormatError):
            Earthquake.from_geojson_feature(feature)

    def test_missing_magnitude_raises(self):
        feature = {
            "id": "nomag",
            "properties": {"time": 0},
            "geometry": {"type": "Point", "coordinates": [1.0, 2.0, 3.0]},
        }
        with pytest.raises(FeedFormatError):
            Earthquake.from_geojson_feature(feature)


class TestFeedUrl:
    def test_default_is_weekly(self):
        assert feed_url().endswith("/all_week.geojson")

    def test_invalid_period_raises(self):
        with pytest.raises(ValueError, match="Unknown period"):
            feed_url("invalid")


class TestFetchFeed:
    def test_fetch_returns_collection(self, httpx_mock):
        httpx_mock.add_response(url=URL, json=SAMPLE_GEOJSON)
        data = _fetch()
        assert len(data["features"]) == 2

    def test_parse_keeps_feed_order(self, httpx_mock):
        httpx_mock.add_response(url=URL, json=SAMPLE_GEOJSON)
        quakes = parse_features(_fetch())
        assert [q.id for q in quakes] == ["us7000test1", "us7000test2"]

    def test_http_error_raises_feed_error(self, httpx_mock):
        httpx_mock.add_response(url=URL, status_code=503)
        with pytest.raises(FeedError) as excinfo:
            _fetch()
        assert excinfo.value.status_code == 503
        assert excinfo.value.url == URL

    def test_network_error_raises_feed_error(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))
        with pytest.raises(FeedError, match="request failed"):
            _fetch()

    def test_invalid_json_raises_feed_error(self, httpx_mock):
        httpx_mock.add_response(url=URL, text="<html>oops</html>")
        with pytest.raises(FeedError, match="not valid JSON"):
            _fetch()

    def test_non_collection_raises_feed_error(self, httpx_mock):
        httpx_mock.add_response(url=URL, json={"type": "Feature"})
        with pytest.raises(FeedError, match="FeatureCollection"):
            _fetch()


def _point(**props_and_coords):
    coords = props_and_coords.pop("coordinates", [-118.5, 34.0, 10.0])
    props = {"mag": 2.0, "place": "Somewhere", "time": 1700000000000}
    props.update(props_and_coords)
    return {
        "type": "Feature",
        "id": "us7000bad",
        "properties": props,
        "geometry": {"type": "Point", "coordinates": coords},
    }


class TestMalformedFeatures:
    def test_null_time(self):
        with pytest.raises(FeedFormatError, match="time"):
            Earthquake.from_geojson_feature(_point(time=None))

    def test_out_of_range_time(self):
        with pytest.raises(FeedFormatError, match="invalid time"):
            Earthquake.from_geojson_feature(_point(time=10**20))

    def test_null_feature(self):
        with pytest.raises(FeedFormatError, match=r"Feature \?"):
            Earthquake.from_geojson_feature(None)

    def test_null_depth(self):
        with pytest.raises(FeedFormatError, match="depth"):
            Earthquake.from_geojson_feature(_point(coordinates=[-118.5, 34.0, None]))

    def test_string_latitude(self):
        with pytest.raises(FeedFormatError, match="latitude"):
            Earthquake.from_geojson_feature(_point(coordinates=[-118.5, "34.0", 10.0]))

    def test_string_magnitude(self):
        with pytest.raises(FeedFormatError, match="magnitude"):
            Earthquake.from_geojson_feature(_point(mag="4.5"))

    def test_integer_members_accepted(self):
        quake = Earthquake.from_geojson_feature(_point(mag=3, coordinates=[-118, 34, 0]))
        assert quake.magnitude == 3
        assert quake.depth == 0

    def test_parse_features_rejects_null_entry(self):
        with pytest.raises(FeedFormatError):
            parse_features({"type": "FeatureCollection", "features": [_point(), None]})
