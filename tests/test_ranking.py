import random

from poi_curation.categories import Category
from poi_curation.geo import offset_coordinate
from poi_curation.models import Coordinate, Place
from poi_curation.ranking import MODE_FREE_TEXT, MODE_NEARBY, name_match_score, rank, ranking_mode

PARIS = Coordinate(48.8566, 2.3522)


def _place(name, category=None, north_m=0.0, east_m=0.0, identity=None):
    return Place(
        name=name,
        coordinate=offset_coordinate(PARIS, north_m=north_m, east_m=east_m),
        category=category,
        identity=identity,
    )


def test_name_match_score_tiers():
    assert name_match_score("Louvre", "louvre") == 0
    assert name_match_score("Louvre Museum", "louvre") == 1
    assert name_match_score("Musee du Louvre", "louvre") == 2
    assert name_match_score("Orsay", "louvre") == 3


def test_free_text_example_follows_literal_comparator():
    places = [
        _place("Natural History Museum", Category.MUSEUM),
        _place("City Park", Category.PARK),
        _place("Musée Rodin", Category.MUSEUM),
    ]
    ranked = rank(places, query="muse")
    # "musée rodin" does not contain "muse" (é != e), so it scores 3 against 2.
    assert [r.name for r in ranked] == ["Natural History Museum", "Musée Rodin", "City Park"]
    assert [r.rank for r in ranked] == [0, 1, 2]
    assert all(r.distance_m is None for r in ranked)


def test_category_priority_dominates_match_quality():
    places = [
        _place("Eiffel", None),
        _place("Eiffel Tower Museum", Category.MUSEUM),
        _place("Tour Eiffel", Category.LANDMARK),
    ]
    ranked = rank(places, query="eiffel")
    assert [r.name for r in ranked] == ["Tour Eiffel", "Eiffel Tower Museum", "Eiffel"]


def test_free_text_alphabetical_fallback_is_ordinal():
    places = [
        _place("beta park", Category.PARK),
        _place("Zeta Park", Category.PARK),
        _place("Alpha Park", Category.PARK),
    ]
    ranked = rank(places, query="garden")
    # Uppercase letters sort before lowercase under ordinal comparison.
    assert [r.name for r in ranked] == ["Alpha Park", "Zeta Park", "beta park"]


def test_uncategorized_ranks_with_the_unknown_floor():
    places = [
        _place("Gare du Nord", Category.PUBLIC_TRANSPORT),
        _place("Gardens", None),
        _place("Garnier", Category.THEATER),
    ]
    ranked = rank(places, query="gar")
    assert ranked[0].name == "Garnier"
    assert {r.name for r in ranked[1:]} == {"Gare du Nord", "Gardens"}
    # Equal priority (50) and equal score (prefix) fall back to the name.
    assert [r.name for r in ranked[1:]] == ["Gardens", "Gare du Nord"]


def test_nearby_mode_orders_by_distance_then_name_ignoring_case():
    places = [
        _place("far", Category.HOTEL, north_m=900),
        _place("b hotel", Category.HOTEL, north_m=100),
        _place("A Hotel", Category.HOTEL, east_m=100),
        _place("near", Category.HOTEL, north_m=10),
    ]
    ranked = rank(places, center=PARIS)
    assert ranked[0].name == "near"
    assert ranked[-1].name == "far"
    assert ranked[0].distance_m is not None and ranked[0].distance_m < 11
    assert [r.distance_m for r in ranked] == sorted(r.distance_m for r in ranked)


def test_nearby_tie_breaks_alphabetically_without_case():
    places = [
        _place("bravo", Category.RESTAURANT),
        _place("Alpha", Category.RESTAURANT),
        _place("charlie", Category.RESTAURANT),
    ]
    ranked = rank(places, center=PARIS)
    assert [r.name for r in ranked] == ["Alpha", "bravo", "charlie"]


def test_mode_selection():
    assert ranking_mode("", PARIS) == MODE_NEARBY
    assert ranking_mode("   ", PARIS) == MODE_NEARBY
    assert ranking_mode("louvre", PARIS) == MODE_FREE_TEXT
    assert ranking_mode("", None) == MODE_FREE_TEXT


def test_rank_is_total_and_idempotent():
    places = [
        _place("Same", Category.MUSEUM, north_m=5, identity="b"),
        _place("Same", Category.MUSEUM, north_m=5, identity="a"),
        _place("Same", Category.MUSEUM, north_m=1),
        _place("same", Category.MUSEUM),
        _place("Other", None, east_m=40),
    ]
    expected = [r.place for r in rank(places, query="same")]
    for seed in range(5):
        shuffled = list(places)
        random.Random(seed).shuffle(shuffled)
        assert [r.place for r in rank(shuffled, query="same")] == expected
    assert [r.place for r in rank(expected, query="same")] == expected

    nearby_expected = [r.place for r in rank(places, center=PARIS)]
    shuffled = list(reversed(places))
    assert [r.place for r in rank(shuffled, center=PARIS)] == nearby_expected


def test_empty_batch_is_a_valid_input():
    assert rank([], query="anything") == []
    assert rank([], center=PARIS) == []


def test_blank_query_with_center_ranks_by_distance():
    places = [_place("Far", north_m=500), _place("Near", north_m=10)]
    ranked = rank(places, query="  ", center=PARIS)
    assert [r.name for r in ranked] == ["Near", "Far"]
    assert all(r.distance_m is not None for r in ranked)

    ranked = rank(places, query="  ")
    assert [r.name for r in ranked] == ["Far", "Near"]
    assert all(r.distance_m is None for r in ranked)
