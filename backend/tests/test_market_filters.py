from app.services.market_filters import (
    MarketFilters,
    PositionEquals,
    SearchText,
    StatTypeEquals,
    SuspensionStateEquals,
    SuspensionStatus,
    parse_suspension_status,
)


def test_no_filters_yield_no_predicates() -> None:
    assert MarketFilters().predicates() == []


def test_empty_params_are_absent() -> None:
    filters = MarketFilters.from_params(position="", stat_type="", search="", suspension_status="")
    assert filters == MarketFilters()
    assert filters.predicates() == []


def test_each_filter_maps_to_one_typed_predicate() -> None:
    filters = MarketFilters.from_params(
        position="PG",
        stat_type="Points",
        search="Tatum",
        suspension_status="active",
    )
    assert filters.predicates() == [
        PositionEquals("PG"),
        StatTypeEquals("Points"),
        SearchText("Tatum"),
        SuspensionStateEquals(False),
    ]


def test_suspended_status_maps_to_true() -> None:
    assert MarketFilters(suspension_status="suspended").predicates() == [SuspensionStateEquals(True)]


def test_unknown_suspension_status_imposes_no_constraint() -> None:
    assert MarketFilters(suspension_status="paused").predicates() == []


def test_parse_suspension_status() -> None:
    assert parse_suspension_status(None) is None
    assert parse_suspension_status("") is None
    assert parse_suspension_status("suspended") is SuspensionStatus.SUSPENDED
    assert parse_suspension_status("active") is SuspensionStatus.ACTIVE
    assert parse_suspension_status("all") is None


def test_status_match_is_exact() -> None:
    for raw in ("SUSPENDED", "Active", " active ", "suspended "):
        assert parse_suspension_status(raw) is None
        assert MarketFilters.from_params(suspension_status=raw).predicates() == []


def test_non_empty_params_are_kept_verbatim() -> None:
    filters = MarketFilters.from_params(position=" PG", stat_type="Points ", search=" Tatum ")
    assert filters.predicates() == [
        PositionEquals(" PG"),
        StatTypeEquals("Points "),
        SearchText(" Tatum "),
    ]
