"""Tests for the tournament extractor domain service."""
from __future__ import annotations

import pytest

from lta_calendar.domain.models.tournament import Tournament
from lta_calendar.domain.services.tournament_extractor import (
    ExtractionProfile,
    TournamentExtractorService,
    extract_postcode,
)


FILLER = "." * 1200


def _extract(text: str, profile: ExtractionProfile | None = None) -> list[Tournament]:
    return TournamentExtractorService(profile).extract(text)


def test_extract_builds_complete_records(sample_calendar_text: str) -> None:
    """Every field of a well-formed entry should be recovered."""

    first, second = _extract(sample_calendar_text)

    assert first == Tournament(
        id="SUS-25-0123-Mixed-Singles-8U",
        code="SUS-25-0123",
        title="Spring Junior",
        gender="Mixed",
        event_type="Singles",
        grade="Grade 4",
        venue="Hove Park",
        postcode="BN1",
        date="Sat 06 Sep",
        month="September 2025",
        category="8U",
        organiser_email="coach@example.com",
        deadline_cd="01/09/2025 10:00",
        deadline_wd="03/09/2025 10:00",
    )
    assert second.id == "SUS-25-0456-Male-Doubles-8U"
    assert second.title == "Autumn Open"
    assert second.grade == "Grade 3"
    assert second.date == "Sun 12 Oct"
    assert second.month == "October 2025"
    assert second.venue == "Preston Park BN1 6SD"
    assert second.postcode == "BN1 6SD"
    assert second.organiser_email == "organiser@club.org.uk"
    assert second.deadline_wd == "07/10/2025 10:00"


def test_extract_is_idempotent(sample_calendar_text: str) -> None:
    """Parsing the same text twice should produce identical records."""

    service = TournamentExtractorService()

    assert service.extract(sample_calendar_text) == service.extract(sample_calendar_text)


def test_extract_skips_codes_from_other_organisations(sample_calendar_text: str) -> None:
    """Codes outside the configured prefix never produce records."""

    text = sample_calendar_text.replace(
        "SUS-25-0456",
        "KEN-25-0001 Kent Cup Female Singles Grade 2 Sat 13 Sep Tunbridge Wells "
        "CD: 08/09/2025 10:00 WD: 10/09/2025 10:00 kent@example.com SUS-25-0456",
    )

    tournaments = _extract(text)

    assert [tournament.code for tournament in tournaments] == ["SUS-25-0123", "SUS-25-0456"]
    assert tournaments[0].organiser_email == "coach@example.com"


def test_extract_honours_configured_organisation_prefix(sample_calendar_text: str) -> None:
    """A different organisation prefix selects that organisation's codes."""

    text = f"{sample_calendar_text} KEN-25-0001 Kent Cup Female Singles Grade 2"

    tournaments = _extract(text, ExtractionProfile(organisation_prefix="ken"))

    assert [tournament.code for tournament in tournaments] == ["KEN-25-0001"]
    assert tournaments[0].gender == "Female"


def test_extract_preserves_document_order() -> None:
    """Records come out in the order their codes appear in the text."""

    text = (
        "SUS-25-0300 Third Mixed Singles Sat 20 Sep "
        "SUS-25-0100 First Mixed Singles Sat 06 Sep "
        "SUS-25-0200 Second Mixed Singles Sat 13 Sep"
    )

    codes = [tournament.code for tournament in _extract(text)]

    assert codes == ["SUS-25-0300", "SUS-25-0100", "SUS-25-0200"]


def test_extract_returns_empty_list_without_codes() -> None:
    """Text without any tournament code yields no records."""

    assert _extract("Sussex calendar: no events published yet") == []


@pytest.mark.parametrize("text", ["", "   \n  "])
def test_extract_rejects_empty_text(text: str) -> None:
    """Blank input is a caller error."""

    with pytest.raises(ValueError):
        _extract(text)


def test_extract_rejects_non_string_input() -> None:
    """Only strings can be parsed."""

    with pytest.raises(TypeError):
        TournamentExtractorService().extract(None)  # type: ignore[arg-type]


def test_extract_normalises_dash_variants_and_spacing() -> None:
    """En dashes and stray spaces inside the code are normalised away."""

    (tournament,) = _extract("sus – 25 — 01 23 Seaside Mixed Singles")

    assert tournament.code == "SUS-25-0123"
    assert tournament.title == "Seaside"


def test_extract_applies_defaults_when_fields_are_missing() -> None:
    """Entries without dates, deadlines or e-mail fall back to sentinels."""

    (tournament,) = _extract("SUS-26-0001 Summer Smash Male Singles Grade 3 Venue to be confirmed")

    assert tournament.date == "TBD"
    assert tournament.month == "Upcoming 2026"
    assert tournament.venue == "Sussex Club"
    assert tournament.postcode == "BN1"
    assert tournament.deadline_cd == "N/A"
    assert tournament.deadline_wd == "N/A"
    assert tournament.organiser_email == ""
    assert tournament.category == "Junior"


def test_extract_defaults_gender_event_type_and_grade() -> None:
    """Gender, event type and grade have their own defaults."""

    (tournament,) = _extract("SUS-25-0042 Coaching Day Sat 06 Sep")

    assert tournament.gender == "Mixed"
    assert tournament.event_type == "Singles"
    assert tournament.grade == "Grade 4"
    assert tournament.title == "Coaching Day Sat 06 Sep"


def test_extract_capitalises_gender_and_event_type() -> None:
    """Upper-case labels are reported in their canonical form."""

    (tournament,) = _extract("SUS-25-0300 Shouty Cup FEMALE DOUBLES GRADE 2")

    assert tournament.gender == "Female"
    assert tournament.event_type == "Doubles"
    assert tournament.grade == "Grade 2"
    assert tournament.id == "SUS-25-0300-Female-Doubles-Junior"


@pytest.mark.parametrize(
    "title_text",
    ["Winter Classic - 1-11-2025", "Winter Classic - 01/11/2025", "- Winter Classic -"],
)
def test_extract_cleans_title(title_text: str) -> None:
    """Separators and trailing embedded dates are removed from titles."""

    (tournament,) = _extract(f"SUS-25-0789 {title_text} Female Singles Grade 5 Sat 01 Nov")

    assert tournament.title == "Winter Classic"
    assert tournament.month == "November 2025"


def test_extract_synthesises_title_from_category() -> None:
    """An entry without title text is named after its category."""

    (tournament,) = _extract("10 & U EVENTS SUS-25-0999 Mixed Doubles Sat 06 Sep")

    assert tournament.title == "10U Event"
    assert tournament.category == "10U"


def test_extract_uses_default_venue_when_deadline_precedes_date() -> None:
    """The venue is only read between the date and the closing deadline."""

    (tournament,) = _extract(
        "SUS-25-0100 Late Entry Mixed Singles CD: 01/09/2025 10:00 Sat 06 Sep Withdean Stadium"
    )

    assert tournament.venue == "Sussex Club"
    assert tournament.date == "Sat 06 Sep"
    assert tournament.deadline_cd == "01/09/2025 10:00"


def test_extract_truncates_long_venues() -> None:
    """Venue text is collapsed and limited to 80 characters."""

    venue_text = "Club   " * 30
    (tournament,) = _extract(
        f"SUS-25-0200 Long Venue Mixed Singles Sat 06 Sep {venue_text}CD: 01/09/2025 10:00"
    )

    assert len(tournament.venue) == 80
    assert tournament.venue == " ".join(venue_text.split())[:80]


def test_extract_reads_postcode_from_venue() -> None:
    """Postcodes embedded in the venue are recognised and upper-cased."""

    (tournament,) = _extract(
        "SUS-25-0500 Club Open Mixed Singles Sat 06 Sep Hove LTC bn3 5fd CD: 01/09/2025 10:00"
    )

    assert tournament.venue == "Hove LTC bn3 5fd"
    assert tournament.postcode == "BN3 5FD"


def test_extract_carries_category_across_entries() -> None:
    """Entries without a nearby heading keep the previous category."""

    text = (
        "11 & U EVENTS - BOYS SUS-25-0001 First Male Singles "
        f"{FILLER} SUS-25-0002 Second Male Singles"
    )

    categories = [tournament.category for tournament in _extract(text)]

    assert categories == ["11U Boys", "11U Boys"]


def test_extract_ignores_headings_outside_lookbehind_window() -> None:
    """Headings more than 1000 characters before an entry are not applied."""

    text = f"14 & U EVENTS - GIRLS {FILLER} SUS-25-0003 Title Female Singles Grade 3"

    (tournament,) = _extract(text)

    assert tournament.category == "Junior"


def test_extract_does_not_track_category_for_skipped_codes() -> None:
    """Anchors of other organisations do not update the category."""

    text = f"12 & U EVENTS - BOYS KEN-25-0001 Kent Male Singles {FILLER} SUS-25-0002 Sussex Male Singles"

    (tournament,) = _extract(text)

    assert tournament.category == "Junior"


def test_extract_switches_category_at_new_heading() -> None:
    """A later heading in the priority table replaces the current category."""

    text = (
        "11 & U EVENTS - BOYS SUS-25-0001 Boys Cup Male Singles "
        "11 & U EVENTS - GIRLS SUS-25-0002 Girls Cup Female Singles"
    )

    categories = [tournament.category for tournament in _extract(text)]

    assert categories == ["11U Boys", "11U Girls"]


def test_extract_resolves_competing_headings_by_table_order() -> None:
    """With two headings in the window the later table entry wins, not the closer one."""

    text = (
        "OPEN EVENTS - MEN SUS-25-0010 Summer Open Male Singles Grade 2 "
        "18 & U EVENTS - GIRLS SUS-25-0011 Girls Cup Female Singles Grade 3"
    )

    categories = [tournament.category for tournament in _extract(text)]

    assert categories == ["Open Men", "Open Men"]


def test_extract_category_state_resets_between_calls() -> None:
    """Each parse starts from the initial category."""

    service = TournamentExtractorService()
    service.extract("16 & U EVENTS - GIRLS SUS-25-0001 Girls Cup Female Singles")

    (tournament,) = service.extract("SUS-25-0002 Next Mixed Singles")

    assert tournament.category == "Junior"


def test_composite_key_ignores_surrounding_noise() -> None:
    """Entries with the same code, gender, type and category share an id."""

    first = _extract("noise one SUS-25-0777 Alpha Cup Female Doubles Grade 2 Sat 06 Sep")
    second = _extract(
        "other stuff entirely SUS - 25 - 0777 Beta Trophy FEMALE doubles grade 5 "
        "Fri 10 Oct Somewhere CD: 01/10/2025 10:00"
    )

    assert first[0].id == second[0].id == "SUS-25-0777-Female-Doubles-Junior"
    assert first[0].title != second[0].title


def test_composite_key_replaces_whitespace_in_category() -> None:
    """Spaces inside the category become underscores in the id."""

    (tournament,) = _extract("14 & U EVENTS - BOYS SUS-25-0014 Boys Cup Male Singles")

    assert tournament.id == "SUS-25-0014-Male-Singles-14U_Boys"


def test_month_year_uses_injectable_year_table() -> None:
    """The year is looked up from the code's year token."""

    text = "SUS-27-0001 Future Cup Mixed Singles Sat 06 Mar"

    (default_year,) = _extract(text)
    (mapped_year,) = _extract(text, ExtractionProfile(year_by_code_token={"27": 2027}))

    assert default_year.month == "March 2026"
    assert mapped_year.month == "March 2027"


def test_month_label_is_upcoming_for_unknown_abbreviation() -> None:
    """Dates whose month cannot be recognised are labelled as upcoming."""

    (tournament,) = _extract("SUS-25-0600 Odd Date Mixed Singles Sat 06 Xyz")

    assert tournament.date == "Sat 06 Xyz"
    assert tournament.month == "Upcoming 2025"


def test_final_entry_tolerates_trailing_footer(sample_calendar_text: str) -> None:
    """Footer text after the last entry does not disturb its fields."""

    text = f"{sample_calendar_text} Page 4 of 4 Printed by the LTA competition team"

    last = _extract(text)[-1]

    assert last.date == "Sun 12 Oct"
    assert last.deadline_cd == "05/10/2025 10:00"
    assert last.organiser_email == "organiser@club.org.uk"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Withdean, rh10 1ab", "RH10 1AB"),
        ("Preston Park BN1  6SD", "BN1 6SD"),
        ("Hove Park", None),
    ],
)
def test_extract_postcode(text: str, expected: str | None) -> None:
    """Postcodes are found with flexible spacing and upper-cased."""

    assert extract_postcode(text) == expected
