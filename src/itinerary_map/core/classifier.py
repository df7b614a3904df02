"""
Stop classification: turn loosely tagged itinerary records into typed Stops.

Legacy itinerary entries often carry nothing but a free-text location, so the
category is inferred from progressively weaker signals. The signals are an
ordered rule list (CLASSIFICATION_RULES), strongest first; the first rule
whose predicate holds decides the category.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from itinerary_map.core.models import (
    ON_WATER_CATEGORIES,
    RawEvent,
    Segment,
    Stop,
    StopCategory,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

# "port" is what editors leave behind when they don't pick a type
GENERIC_TYPE = "port"

TYPE_ALIASES: Dict[str, StopCategory] = {
    "port": StopCategory.CRUISE_PORT,
    "port_call": StopCategory.CRUISE_PORT,
    "embark": StopCategory.EMBARKATION,
    "embarkation": StopCategory.EMBARKATION,
    "disembark": StopCategory.DISEMBARKATION,
    "disembarkation": StopCategory.DISEMBARKATION,
    "sea": StopCategory.SEA_DAY,
    "sea_day": StopCategory.SEA_DAY,
    "at_sea": StopCategory.SEA_DAY,
    "scenic": StopCategory.SCENIC_CRUISING,
    "scenic_cruising": StopCategory.SCENIC_CRUISING,
    "tender": StopCategory.TENDER_PORT,
    "private_island": StopCategory.PRIVATE_ISLAND,
    "flight_out": StopCategory.FLIGHT_OUTBOUND,
    "flight_outbound": StopCategory.FLIGHT_OUTBOUND,
    "flight_return": StopCategory.FLIGHT_RETURN,
    "flight_connection": StopCategory.FLIGHT_CONNECTION,
    "flight_internal": StopCategory.FLIGHT_CONNECTION,
    "connection": StopCategory.FLIGHT_CONNECTION,
    "train": StopCategory.RAIL,
    "rail": StopCategory.RAIL,
    "hotel": StopCategory.HOTEL,
    "transfer": StopCategory.TRANSFER,
}

# Direction of a bare "flight" tag depends on the segment
GENERIC_FLIGHT_TYPE = "flight"

AIRPORT_NAMES: Tuple[str, ...] = (
    "airport",
    "aeropuerto",
    "aeroporto",
    "aéroport",
    "heathrow",
    "gatwick",
    "stansted",
    "luton",
    "london city",
)

AIRPORT_CODES = frozenset({
    # UK departure airports
    "LHR", "LGW", "STN", "LTN", "LCY", "MAN", "BHX", "EDI", "GLA", "BRS",
    "NCL", "LBA", "EMA", "CWL", "BFS", "ABZ", "SOU",
    # Common fly-cruise gateways
    "AGP", "BCN", "PMI", "LIS", "FAO", "TFS", "LPA", "ACE", "FUE", "FNC",
    "ATH", "FCO", "VCE", "CPH", "OSL", "MIA", "FLL", "MCO", "SEA", "ANC",
    "YVR",
})

# Inland UK departure cities. Anywhere with a cruise terminal (London/Tilbury,
# Newcastle, Belfast, Greenock, Leith...) must stay out or its embarkation day
# turns into a flight.
HOME_CITIES: Tuple[str, ...] = (
    "manchester",
    "birmingham",
    "leeds",
    "bradford",
    "east midlands",
    "nottingham",
    "sheffield",
)

PRIVATE_ISLANDS: Tuple[str, ...] = (
    "cococay",
    "coco cay",
    "castaway cay",
    "half moon cay",
    "little san salvador",
    "ocean cay",
    "great stirrup cay",
    "labadee",
    "labadie",
    "harvest caye",
    "harvest cay",
    "princess cays",
)

_SEA_DAY_PHRASE = re.compile(r"\b(at sea|cruising|sea day)\b")

_STATUS_SUFFIX = re.compile(
    r"\s*\((overnight|day|tender|anchor|docked|pier|embarkation|disembarkation|scenic cruising)\)\s*$",
    re.IGNORECASE,
)
_OVERNIGHT_PREFIX = re.compile(r"^overnight\s+(in|at)\s+", re.IGNORECASE)
_CODE_TOKEN = re.compile(r"\b[A-Z]{3}\b")

# Markers that only describe timing, not a port status worth keeping
_TIMING_MARKERS = {"overnight", "day"}


# ---------------------------------------------------------------------------
# Event context
# ---------------------------------------------------------------------------

def _normalize_tag(tag: Optional[str]) -> Optional[str]:
    if not tag:
        return None
    return re.sub(r"[\s\-]+", "_", tag.strip().lower()) or None


def _parse_segment(segment: Optional[str]) -> Optional[Segment]:
    tag = _normalize_tag(segment)
    if tag is None:
        return None
    try:
        return Segment(tag)
    except ValueError:
        return None


def _split_name(raw_name: str) -> Tuple[str, List[str], bool]:
    """Strip status markers: returns (clean name, markers, overnight prefix seen)."""
    name = raw_name.strip()
    overnight_prefix = False
    if _OVERNIGHT_PREFIX.match(name):
        name = _OVERNIGHT_PREFIX.sub("", name, count=1)
        overnight_prefix = True

    markers: List[str] = []
    while True:
        m = _STATUS_SUFFIX.search(name)
        if m is None:
            break
        markers.insert(0, m.group(1).lower())
        name = name[: m.start()].rstrip()
    return name, markers, overnight_prefix


def _contains_any(text: str, needles: Iterable[str]) -> bool:
    return any(n in text for n in needles)


@dataclass(frozen=True)
class EventContext:
    """Pre-digested view of a raw event that the rules read from."""
    raw: RawEvent
    name: str
    lowered: str
    markers: Tuple[str, ...]
    overnight_prefix: bool
    tag: Optional[str]
    segment: Optional[Segment]

    @classmethod
    def from_raw(cls, raw: RawEvent) -> EventContext:
        name, markers, overnight_prefix = _split_name(raw.location or "")
        return cls(
            raw=raw,
            name=name,
            lowered=(raw.location or "").strip().lower(),
            markers=tuple(markers),
            overnight_prefix=overnight_prefix,
            tag=_normalize_tag(raw.type),
            segment=_parse_segment(raw.segment),
        )

    @property
    def explicit_category(self) -> Optional[StopCategory]:
        """Category named by the type tag, unless the tag is missing, generic or unknown."""
        if self.tag is None or self.tag == GENERIC_TYPE:
            return None
        if self.tag == GENERIC_FLIGHT_TYPE:
            if self.segment is Segment.POST_CRUISE:
                return StopCategory.FLIGHT_RETURN
            return StopCategory.FLIGHT_OUTBOUND
        return TYPE_ALIASES.get(self.tag)

    @property
    def is_embarkation_event(self) -> bool:
        return "embark" in self.lowered.replace("disembark", "")

    @property
    def is_disembarkation_event(self) -> bool:
        return "disembark" in self.lowered

    @property
    def is_sea_day(self) -> bool:
        return (
            self.raw.is_sea_day
            or self.tag in ("sea", "sea_day", "at_sea", "scenic", "scenic_cruising")
            or not self.lowered
            or _SEA_DAY_PHRASE.search(self.lowered) is not None
        )

    @property
    def mentions_airport(self) -> bool:
        if _contains_any(self.lowered, AIRPORT_NAMES):
            return True
        return any(tok in AIRPORT_CODES for tok in _CODE_TOKEN.findall(self.raw.location or ""))

    @property
    def mentions_hotel(self) -> bool:
        return "hotel" in self.lowered or "resort" in self.lowered

    @property
    def mentions_home_city(self) -> bool:
        return _contains_any(self.lowered, HOME_CITIES)


# ---------------------------------------------------------------------------
# Rules, strongest signal first
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClassificationRule:
    name: str
    predicate: Callable[[EventContext], bool]
    produce: Callable[[EventContext], StopCategory]


def _refine_port(ctx: EventContext) -> StopCategory:
    """Subtype for an event that fell through to the port default."""
    if "tender" in ctx.markers:
        return StopCategory.TENDER_PORT
    if ctx.is_disembarkation_event:
        return StopCategory.DISEMBARKATION
    if ctx.is_embarkation_event:
        return StopCategory.EMBARKATION
    if _contains_any(ctx.lowered, PRIVATE_ISLANDS):
        return StopCategory.PRIVATE_ISLAND
    return StopCategory.CRUISE_PORT


CLASSIFICATION_RULES: List[ClassificationRule] = [
    ClassificationRule(
        "explicit_type",
        lambda ctx: ctx.explicit_category is not None,
        lambda ctx: ctx.explicit_category,
    ),
    ClassificationRule(
        "sea_day",
        lambda ctx: ctx.is_sea_day,
        lambda ctx: StopCategory.SEA_DAY,
    ),
    ClassificationRule(
        "airport_name",
        lambda ctx: ctx.mentions_airport,
        lambda ctx: (
            StopCategory.FLIGHT_RETURN
            if ctx.segment is Segment.POST_CRUISE
            else StopCategory.FLIGHT_OUTBOUND
        ),
    ),
    ClassificationRule(
        "hotel_name",
        lambda ctx: ctx.mentions_hotel,
        lambda ctx: StopCategory.HOTEL,
    ),
    ClassificationRule(
        "pre_cruise_segment",
        lambda ctx: ctx.segment is Segment.PRE_CRUISE and not ctx.is_embarkation_event,
        lambda ctx: StopCategory.FLIGHT_OUTBOUND if ctx.mentions_home_city else StopCategory.HOTEL,
    ),
    ClassificationRule(
        "post_cruise_segment",
        lambda ctx: ctx.segment is Segment.POST_CRUISE and not ctx.is_disembarkation_event,
        lambda ctx: StopCategory.FLIGHT_RETURN if ctx.mentions_home_city else StopCategory.HOTEL,
    ),
    ClassificationRule(
        "first_day_home_city",
        lambda ctx: ctx.raw.day == 1 and ctx.mentions_home_city,
        lambda ctx: StopCategory.FLIGHT_OUTBOUND,
    ),
    ClassificationRule(
        "default_port",
        lambda ctx: True,
        _refine_port,
    ),
]


def first_matching_rule(
    ctx: EventContext,
    rules: Optional[List[ClassificationRule]] = None,
) -> ClassificationRule:
    for rule in CLASSIFICATION_RULES if rules is None else rules:
        if rule.predicate(ctx):
            return rule
    # default_port always matches; only reachable with a custom rule list
    return CLASSIFICATION_RULES[-1]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def classify_event(raw: Union[RawEvent, Mapping[str, Any]]) -> Stop:
    """Classify one itinerary record. Never raises on malformed input."""
    event = raw if isinstance(raw, RawEvent) else RawEvent.model_validate(raw)
    ctx = EventContext.from_raw(event)

    rule = first_matching_rule(ctx)
    category = rule.produce(ctx)
    log.debug("Day %s %r -> %s (%s)", event.day, event.location, category.value, rule.name)

    spans_nights = (
        event.day is not None and event.day_end is not None and event.day_end > event.day
    )
    is_overnight = (
        "overnight" in ctx.markers
        or ctx.overnight_prefix
        or (spans_nights and category in ON_WATER_CATEGORIES)
    )
    notes = [m for m in ctx.markers if m not in _TIMING_MARKERS]

    display_name = ctx.name or None
    if display_name is None and category is StopCategory.SEA_DAY:
        display_name = StopCategory.SEA_DAY.label

    return Stop(
        category=category,
        day_index=event.day,
        day_end=event.day_end,
        display_name=display_name,
        country=event.country,
        coordinates=event.coordinates,
        is_overnight=is_overnight,
        is_sea_day=category is StopCategory.SEA_DAY or (
            category is StopCategory.SCENIC_CRUISING and ctx.is_sea_day
        ),
        note=", ".join(notes) or None,
        segment=ctx.segment,
        description=event.description,
        hotel_name=event.hotel_name,
    )


def classify_itinerary(raws: Iterable[Union[RawEvent, Mapping[str, Any]]]) -> List[Stop]:
    return [classify_event(r) for r in raws]
