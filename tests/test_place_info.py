from src.pipeline.place_info import PlaceInfoExtractor


def test_extract_place_info_from_title_and_body() -> None:
    extractor = PlaceInfoExtractor()

    info = extractor.extract(
        "Sunrise Cafe - 1,234 reviews - Google Maps",
        "Sunrise Cafe 4.6(1,234) Coffee shop 123 Main St, Tampa, FL 33602 Open ⋅ Closes 5 PM",
    )

    assert info.name == "Sunrise Cafe"
    assert info.review_count == 1234
    assert info.rating == 4.6
    assert info.address == "123 Main St, Tampa, FL 33602"


def test_rating_accepts_stars_suffix() -> None:
    assert PlaceInfoExtractor().parse_rating("Rated 4.8 stars by visitors") == 4.8


def test_review_count_falls_back_to_rating_aggregate_in_body() -> None:
    info = PlaceInfoExtractor().extract(
        "Joe's Diner - Google Maps",
        "Joe's Diner 4.5(210) Diner Dawn Melancon Local Guide · 45 reviews 3 weeks ago Great food",
    )

    assert info.name == "Joe's Diner"
    assert info.rating == 4.5
    assert info.review_count == 210


def test_reviewer_badge_count_is_not_taken_as_place_count() -> None:
    info = PlaceInfoExtractor().extract(
        "Joe's Diner - Google Maps",
        "Dawn Melancon Local Guide · 45 reviews 3 weeks ago Great food",
    )

    assert info.review_count == 0


def test_unmatched_fields_default_to_empty() -> None:
    info = PlaceInfoExtractor().extract("Google Maps", "Nothing useful here")

    assert info.name == ""
    assert info.address == ""
    assert info.rating == 0.0
    assert info.review_count == 0
    assert info.is_empty()


def test_place_info_serializes_review_count_in_camel_case() -> None:
    info = PlaceInfoExtractor().extract("Sunrise Cafe - 12 reviews", "")

    assert info.model_dump(by_alias=True)["reviewCount"] == 12
