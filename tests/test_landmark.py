from poi_curation import config
from poi_curation.categories import Category
from poi_curation.landmark import (
    ASIA,
    EUROPE,
    continent_for,
    country_code,
    landmark_payload,
    standardized_name,
    subtitle,
)
from poi_curation.models import Coordinate, Place


def test_country_code_and_continent():
    assert country_code("us-ca") == "US"
    assert country_code(" ") is None
    assert country_code(None) is None
    assert continent_for("FR") == EUROPE
    assert continent_for("JP") == ASIA
    assert continent_for("ZZ") is None


def test_standardized_name():
    assert standardized_name(" Tokyo Tower ", "JP") == "Tokyo Tower, JP"
    assert standardized_name("Tokyo Tower", None) == "Tokyo Tower"
    assert standardized_name("  ", "JP") == ""


def test_subtitle_prefers_category_and_city():
    place = Place("Louvre", Coordinate(48.86, 2.3376), Category.MUSEUM, city="Paris")
    assert subtitle(place) == "Museum Paris"
    bare = Place("Somewhere", Coordinate(48.123456, 2.987654))
    assert subtitle(bare) == "48.1235, 2.9877"


def test_landmark_payload():
    place = Place(
        name="Musée du Louvre",
        coordinate=Coordinate(48.8606111, 2.337644),
        category=Category.MUSEUM,
        identity="louvre-id",
        region_code="FR",
    )
    payload = landmark_payload(place, description="Art.", short_description="Art.")
    assert payload == {
        "name": "Musee du Louvre, FR",
        "continent": EUROPE,
        "id": 9999,
        "placeID": "louvre-id",
        "longitude": 2.33764,
        "latitude": 48.86061,
        "span": 0.03,
        "description": "Art.",
        "shortDescription": "Art.",
    }


def test_landmark_payload_defaults_for_uncategorized_feature():
    place = Place(name="Mont Blanc", coordinate=Coordinate(45.8326, 6.8652))
    payload = landmark_payload(place)
    assert payload["span"] == config.DEFAULT_LANDMARK_SPAN
    assert payload["continent"] == ""
    assert payload["placeID"] == ""
