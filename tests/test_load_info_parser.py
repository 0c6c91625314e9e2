from load_responder.services.load_info_parser import parse_load_info, pending_load_info

SEARCH_RESULT = """Shipment QF-88231
Pickup: Dallas, TX 75201 - 10/21 08:00
Delivery: Houston, TX 77002 - 10/22 14:00
Weight: 42,000 lbs
Rate: $1,850.00
"""


def test_parses_labelled_fields() -> None:
    info = parse_load_info(SEARCH_RESULT)

    assert info is not None
    assert info.pickup == "Dallas, TX 75201 - 10/21 08:00"
    assert info.delivery == "Houston, TX 77002 - 10/22 14:00"
    assert info.weight == "42,000 lbs"
    assert info.rate == "1,850.00"


def test_missing_fields_become_not_available() -> None:
    info = parse_load_info("Pickup: Springfield, IL 62701")

    assert info is not None
    assert info.pickup == "Springfield, IL 62701"
    assert info.weight == "N/A"
    assert info.rate == "N/A"


def test_keyword_only_page_still_counts_as_found() -> None:
    info = parse_load_info("delivery\n")

    assert info is not None
    assert info.pickup == "N/A"
    assert info.delivery == "N/A"


def test_unrelated_page_returns_none() -> None:
    assert parse_load_info("No results") is None
    assert parse_load_info("") is None


def test_pending_placeholder() -> None:
    info = pending_load_info()

    assert info.pickup == "Details being retrieved..."
    assert info.weight == "TBD"
    assert info.rate == "Quote being prepared..."
