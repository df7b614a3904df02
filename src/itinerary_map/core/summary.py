"""
Holiday-at-a-glance summary.

Collapses the day-by-day itinerary into a handful of cards (outbound flight,
hotel stay, cruise, return flight...) for the overview above the full
timeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from itinerary_map.core.models import JourneyCard, Segment, Stop, StopCategory

# Stops of these categories count as nights aboard
_CRUISE_NIGHT_CATEGORIES = frozenset({
    StopCategory.CRUISE_PORT,
    StopCategory.SEA_DAY,
    StopCategory.SCENIC_CRUISING,
    StopCategory.TENDER_PORT,
    StopCategory.PRIVATE_ISLAND,
})

CARD_KINDS: Dict[StopCategory, str] = {
    StopCategory.FLIGHT_OUTBOUND: "flight_out",
    StopCategory.FLIGHT_RETURN: "flight_return",
    StopCategory.FLIGHT_CONNECTION: "flight_connection",
    StopCategory.HOTEL: "hotel",
    StopCategory.RAIL: "train",
    StopCategory.EMBARKATION: "cruise",
    StopCategory.DISEMBARKATION: "cruise",
    StopCategory.CRUISE_PORT: "cruise",
    StopCategory.SEA_DAY: "cruise",
    StopCategory.SCENIC_CRUISING: "cruise",
    StopCategory.TENDER_PORT: "cruise",
    StopCategory.PRIVATE_ISLAND: "cruise",
}


@dataclass
class JourneyGroup:
    kind: str  # flight / hotel / train / cruise
    sub_kind: str
    items: List[Stop] = field(default_factory=list)
    segment: Segment = Segment.CRUISE
    city: Optional[str] = None


def _base_kind(sub_kind: str) -> str:
    return "flight" if sub_kind.startswith("flight") else sub_kind


def extract_journey_segments(stops: Sequence[Stop]) -> List[JourneyGroup]:
    """Group consecutive stops of the same journey stage. Transfers are skipped."""
    groups: List[JourneyGroup] = []
    current: Optional[JourneyGroup] = None

    for stop in stops:
        sub_kind = CARD_KINDS.get(stop.category)
        if sub_kind is None:
            continue

        kind = _base_kind(sub_kind)
        location = stop.display_name or stop.hotel_name or ""

        starts_new = (
            current is None
            or kind != current.kind
            or (kind == "flight" and sub_kind != current.sub_kind)
            # multi-city stays get one card per city
            or (kind == "hotel" and current.city is not None and current.city != location)
        )
        if starts_new:
            current = JourneyGroup(
                kind=kind,
                sub_kind=sub_kind,
                segment=stop.segment or Segment.CRUISE,
                city=location if kind == "hotel" else None,
            )
            groups.append(current)
        current.items.append(stop)

    return groups


def _nights(stop: Stop) -> int:
    if stop.day_index is not None and stop.day_end is not None and stop.day_end > stop.day_index:
        return stop.day_end - stop.day_index + 1
    return 1


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'s' if n != 1 else ''}"


def format_journey_group(group: JourneyGroup) -> JourneyCard:
    items = group.items
    first, last = items[0], items[-1]
    days = [s.day_index for s in items if s.day_index is not None]

    if group.kind == "flight":
        if group.sub_kind == "flight_return" or group.segment is Segment.POST_CRUISE:
            title = "Return Flight"
        elif group.sub_kind == "flight_connection":
            title = "Connecting Flight"
        else:
            title = "Outbound Flight"
        origin = first.display_name or "Departure"
        destination = last.display_name or "Arrival"
        details = _plural(len(items), "flight") if len(items) > 1 else None
        subtitle = f"{origin} → {destination}"

    elif group.kind == "hotel":
        title = f"{first.display_name or 'City'} Stay"
        subtitle = first.hotel_name or "Hotel included"
        details = _plural(len(items), "night")

    elif group.kind == "train":
        title = "Train Journey"
        subtitle = f"{first.display_name or 'Start'} → {last.display_name or 'End'}"
        details = _plural(len(items), "day") if len(items) > 1 else None

    else:
        nights = sum(_nights(s) for s in items if s.category in _CRUISE_NIGHT_CATEGORIES)
        embark = next((s for s in items if s.category is StopCategory.EMBARKATION), first)
        disembark = next((s for s in items if s.category is StopCategory.DISEMBARKATION), last)
        embark_port = embark.display_name or "Port"
        disembark_port = disembark.display_name or embark_port
        title = "Cruise"
        if embark_port == disembark_port:
            subtitle = f"Round-trip from {embark_port}"
        else:
            subtitle = f"{embark_port} → {disembark_port}"
        details = _plural(nights, "night")

    return JourneyCard(
        kind=group.kind,
        title=title,
        subtitle=subtitle,
        details=details,
        segment=group.segment,
        days=days,
    )


def summarize_journey(stops: Sequence[Stop]) -> List[JourneyCard]:
    return [format_journey_group(g) for g in extract_journey_segments(stops)]
