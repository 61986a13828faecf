"""Domain service that extracts tournaments from flattened calendar text.

Text extracted from the multi-column LTA calendar PDF loses its table layout:
codes, titles, dates and deadlines of one row end up interleaved in a single
stream. Entries are therefore located through their tournament code, and every
field is searched for inside the slice of text that runs up to the next code.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from lta_calendar.domain.models.tournament import Tournament, build_tournament_id


_DASH_VARIANTS_RE = re.compile("[–—]")
_SEPARATOR_EDGES_RE = re.compile(r"^[-\s]+|[-\s]+$")
_TRAILING_DATE_RE = re.compile(r"\s*-\s*\d{1,2}\s*[-/]\s*\d{1,2}\s*[-/]\s*\d{2,4}\s*$")

ENTRY_ANCHOR_PATTERN = re.compile(
    r"[A-Z]\s*[A-Z]\s*[A-Z]\s*-\s*\d\s*\d\s*-\s*\d\s*\d\s*\d\s*\d", re.IGNORECASE
)
POSTCODE_PATTERN = re.compile(
    r"[A-Z]{1,2}\s*[0-9]\s*[A-Z0-9]?\s*[0-9]\s*[A-Z]\s*[A-Z]", re.IGNORECASE
)
CD_LABEL = "CD:"

MONTH_NAMES: Mapping[str, str] = {
    name[:3].upper(): name
    for name in (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    )
}
UNKNOWN_MONTH = "Upcoming"


def normalize_dashes(text: str) -> str:
    """Rewrite en and em dashes as plain hyphens."""

    return _DASH_VARIANTS_RE.sub("-", text)


def normalize_code(raw_code: str) -> str:
    """Return ``raw_code`` without whitespace and upper-cased."""

    return "".join(raw_code.split()).upper()


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def extract_postcode(text: str) -> Optional[str]:
    """Return the first UK postcode found in ``text`` or ``None``."""

    match = POSTCODE_PATTERN.search(text)
    return _collapse_whitespace(match.group(0)).upper() if match else None


@dataclass(frozen=True)
class CategoryHeading:
    """Pair a category label with the pattern recognising its heading."""

    label: str
    pattern: re.Pattern[str]


def _age_heading(age: int) -> re.Pattern[str]:
    return re.compile(rf"{age}\s*&\s*U\s*EVENTS", re.IGNORECASE)


def _grouped_heading(prefix: str, group: str) -> re.Pattern[str]:
    return re.compile(rf"{prefix}\s*EVENTS?\s*[-–—]\s*{group}", re.IGNORECASE)


# Evaluation order matters: when several headings appear inside the lookbehind
# window the last matching entry of this tuple wins.
CATEGORY_HEADINGS: Tuple[CategoryHeading, ...] = (
    *(CategoryHeading(f"{age}U", _age_heading(age)) for age in (8, 9, 10)),
    *(
        CategoryHeading(f"{age}U {group}", _grouped_heading(rf"{age}\s*&\s*U", group.upper()))
        for age in (11, 12, 14, 16, 18)
        for group in ("Boys", "Girls")
    ),
    CategoryHeading("Open Men", _grouped_heading("OPEN", "MEN")),
    CategoryHeading("Open Women", _grouped_heading("OPEN", "WOMEN")),
)


class CategoryTracker:
    """Follow the category heading governing each entry of one document.

    A tracker holds the category of the previous entry, so a new instance must
    be created for every document.
    """

    def __init__(
        self,
        headings: Sequence[CategoryHeading] = CATEGORY_HEADINGS,
        lookbehind: int = 1000,
        initial_category: str = "Junior",
    ) -> None:
        """Initialize the tracker with its heading table and window size."""

        self._headings = tuple(headings)
        self._lookbehind = lookbehind
        self.current = initial_category

    def advance(self, text: str, position: int) -> str:
        """Return the category for the entry starting at ``position``.

        Only the ``lookbehind`` characters preceding the entry are inspected.
        Without any heading in that window the previous category is kept.
        """

        window = text[max(0, position - self._lookbehind) : position]
        for heading in self._headings:
            if heading.pattern.search(window):
                self.current = heading.label
        return self.current


@dataclass(frozen=True)
class FieldRule:
    """Declarative description of a single field search within an entry."""

    name: str
    pattern: re.Pattern[str]
    default: str
    group: int = 0
    clean: Optional[Callable[[str], str]] = None

    def apply(self, chunk: str) -> Tuple[str, Optional[re.Match[str]]]:
        """Return the cleaned first match in ``chunk`` and the match itself.

        Without a match the rule's default is returned together with ``None``.
        """

        match = self.pattern.search(chunk)
        if match is None:
            return self.default, None
        value = match.group(self.group)
        return (self.clean(value) if self.clean else value), match


_DEADLINE_VALUE = r"\s*(\d{2}/\d{2}/\d{4}\s*\d{2}:\d{2})"


def _rule(
    name: str,
    pattern: str,
    default: str,
    group: int = 0,
    clean: Optional[Callable[[str], str]] = None,
) -> FieldRule:
    return FieldRule(name, re.compile(pattern, re.IGNORECASE), default, group, clean)


# The title and venue are derived from the matches of the gender, event_type
# and date rules, so those three names must always be present.
FIELD_RULES: Tuple[FieldRule, ...] = (
    _rule("gender", r"\b(Mixed|Male|Female)\b", "Mixed", clean=str.capitalize),
    _rule("event_type", r"\b(Singles|Doubles)\b", "Singles", clean=str.capitalize),
    _rule("grade", r"(?:Singles|Doubles|Grade)\s*(\d)", "4", 1),
    _rule(
        "date",
        r"(?:Sat|Sun|Mon|Tue|Wed|Thu|Fri)\s*\d{1,2}\s*\w{3}",
        "TBD",
        clean=_collapse_whitespace,
    ),
    _rule("deadline_cd", rf"CD:{_DEADLINE_VALUE}", "N/A", 1),
    _rule("deadline_wd", rf"WD:{_DEADLINE_VALUE}", "N/A", 1),
    _rule(
        "organiser_email",
        r"[a-zA-Z0-9._%+-]+\s*@\s*[a-zA-Z0-9.-]+\s*\.\s*[a-zA-Z]{2,}",
        "",
        clean=lambda value: "".join(value.split()),
    ),
)


@dataclass(frozen=True)
class ExtractionProfile:
    """Organisation specific settings used while extracting tournaments."""

    organisation_prefix: str = "SUS"
    default_venue: str = "Sussex Club"
    default_postcode: str = "BN1"
    initial_category: str = "Junior"
    lookbehind: int = 1000
    max_venue_length: int = 80
    year_by_code_token: Mapping[str, int] = field(
        default_factory=lambda: {"25": 2025, "26": 2026}
    )
    default_year: int = 2026

    @property
    def code_prefix(self) -> str:
        """Return the prefix every retained tournament code starts with."""

        return f"{self.organisation_prefix.strip().upper()}-"

    def year_for(self, code: str) -> int:
        """Return the calendar year encoded by the two-digit token of ``code``."""

        parts = code.split("-")
        token = parts[1] if len(parts) > 2 else ""
        return self.year_by_code_token.get(token, self.default_year)


class TournamentExtractorService:
    """Build tournament records from the text of an LTA calendar."""

    def __init__(
        self,
        profile: ExtractionProfile | None = None,
        headings: Sequence[CategoryHeading] = CATEGORY_HEADINGS,
        field_rules: Sequence[FieldRule] = FIELD_RULES,
    ) -> None:
        """Initialize the service with an optional organisation profile."""

        self._profile = profile or ExtractionProfile()
        self._headings = tuple(headings)
        self._field_rules = tuple(field_rules)

    def extract(self, text: str) -> List[Tournament]:
        """Return the tournaments of ``text`` in document order."""

        if not isinstance(text, str):
            raise TypeError("The calendar text must be a string.")
        if not text.strip():
            raise ValueError("The calendar text is empty.")

        normalized_text = normalize_dashes(text)
        anchors = list(ENTRY_ANCHOR_PATTERN.finditer(normalized_text))
        tracker = CategoryTracker(
            self._headings,
            lookbehind=self._profile.lookbehind,
            initial_category=self._profile.initial_category,
        )
        code_prefix = self._profile.code_prefix

        tournaments: List[Tournament] = []
        for index, anchor in enumerate(anchors):
            code = normalize_code(anchor.group(0))
            if not code.startswith(code_prefix):
                logger.debug("Skipping tournament code {} outside {}", code, code_prefix)
                continue

            start = anchor.start()
            end = anchors[index + 1].start() if index + 1 < len(anchors) else len(normalized_text)
            category = tracker.advance(normalized_text, start)
            chunk = normalized_text[start:end]
            tournaments.append(
                self._build_tournament(chunk, len(anchor.group(0)), code, category)
            )

        logger.debug(
            "Extracted {} tournaments from {} code anchors", len(tournaments), len(anchors)
        )
        return tournaments

    def _build_tournament(
        self, chunk: str, code_length: int, code: str, category: str
    ) -> Tournament:
        values: Dict[str, str] = {}
        matches: Dict[str, Optional[re.Match[str]]] = {}
        for rule in self._field_rules:
            values[rule.name], matches[rule.name] = rule.apply(chunk)

        markers = [matches[name] for name in ("gender", "event_type") if matches[name]]
        stop = min(marker.start() for marker in markers) if markers else len(chunk)
        title = _TRAILING_DATE_RE.sub("", _SEPARATOR_EDGES_RE.sub("", chunk[code_length:stop]))
        title = _SEPARATOR_EDGES_RE.sub("", title)
        venue = self._extract_venue(chunk, matches["date"])

        return Tournament(
            id=build_tournament_id(code, values["gender"], values["event_type"], category),
            code=code,
            title=title or f"{category} Event",
            gender=values["gender"],
            event_type=values["event_type"],
            grade=f"Grade {values['grade']}",
            venue=venue,
            postcode=extract_postcode(venue) or self._profile.default_postcode,
            date=values["date"],
            month=self._month_label(values["date"], code),
            category=category,
            organiser_email=values["organiser_email"],
            deadline_cd=values["deadline_cd"],
            deadline_wd=values["deadline_wd"],
        )

    def _extract_venue(self, chunk: str, date_match: Optional[re.Match[str]]) -> str:
        cd_start = chunk.find(CD_LABEL)
        if date_match is None or cd_start <= date_match.end():
            return self._profile.default_venue

        venue = _collapse_whitespace(chunk[date_match.end() : cd_start])
        return venue[: self._profile.max_venue_length] or self._profile.default_venue

    def _month_label(self, date: str, code: str) -> str:
        month = MONTH_NAMES.get(date.upper().split(" ")[-1], UNKNOWN_MONTH)
        return f"{month} {self._profile.year_for(code)}"
