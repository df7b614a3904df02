from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table

from itinerary_map.config import settings
from itinerary_map.contracts.route_contract import RouteMap
from itinerary_map.core.engine import build_route_map
from itinerary_map.core.summary import summarize_journey
from itinerary_map.geo.geojson import route_map_to_geojson

log = logging.getLogger(__name__)


def _read_itinerary(path: Path) -> List[Dict[str, Any]]:
    data = json.loads(path.read_text(encoding="utf-8"))
    # Accept a bare list or a cruise config with an "itinerary" key
    if isinstance(data, dict):
        data = data.get("itinerary", [])
    if not isinstance(data, list):
        raise SystemExit(f"No itinerary list found in {path}")
    return data


def _save_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def _stops_table(route_map: RouteMap) -> Table:
    table = Table(title="Itinerary")
    table.add_column("Day")
    table.add_column("Location")
    table.add_column("Country")
    table.add_column("Type")
    table.add_column("Lat")
    table.add_column("Lon")
    table.add_column("Note")

    for s in route_map.stops:
        day = "" if s.day_index is None else str(s.day_index)
        if s.day_end is not None and s.day_index is not None and s.day_end > s.day_index:
            day = f"{s.day_index}-{s.day_end}"
        table.add_row(
            day,
            s.display_name or "",
            s.country or "",
            s.category.label,
            f"{s.coordinates.lat:.4f}" if s.coordinates else "",
            f"{s.coordinates.lon:.4f}" if s.coordinates else "",
            ", ".join(filter(None, [s.note, "overnight" if s.is_overnight else None])),
        )
    return table


def _route_table(route_map: RouteMap) -> Table:
    table = Table(title=f"Mappable route ({route_map.path.total_distance_km:.0f} km)")
    table.add_column("#")
    table.add_column("Port")
    table.add_column("Days")
    table.add_column("Type")
    table.add_column("Bearing to next")

    bearings = {b.from_index: b.bearing_deg for b in route_map.path.bearings}
    for s in route_map.route_stops:
        brg = bearings.get(s.index)
        table.add_row(
            str(s.index + 1),
            s.display_name + (" (round trip)" if s.is_round_trip_anchor else ""),
            ", ".join(str(d) for d in s.visit_days),
            s.category.label,
            f"{brg:.0f}°" if brg is not None else "",
        )
    return table


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--itinerary", default="trips/itinerary.json", help="Path to an itinerary JSON file")
    ap.add_argument("--geojson", default=None, help="Also write the route as GeoJSON to this path")
    ap.add_argument("--spacing-km", type=float, default=settings.path_spacing_km)
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else settings.log_level,
        format="%(asctime)s [itinerary-map] %(levelname)s %(message)s",
    )

    events = _read_itinerary(Path(args.itinerary))
    route_map = build_route_map(
        events,
        spacing_km=args.spacing_km,
        tolerance_deg=settings.round_trip_tolerance_deg,
        min_points=settings.min_points_per_leg,
    )

    console = Console()
    console.print(_stops_table(route_map))

    if route_map.is_mappable:
        console.print(_route_table(route_map))
    else:
        console.print("[yellow]Map not available: fewer than two mappable stops[/yellow]")

    for card in summarize_journey(route_map.stops):
        extra = f" ({card.details})" if card.details else ""
        console.print(f"[bold]{card.title}[/bold]: {card.subtitle}{extra}")

    # save last run
    trips_dir = Path("trips")
    _save_json(trips_dir / "last_route_map.json", route_map.to_dict())
    console.print(f"Saved: {(trips_dir / 'last_route_map.json').resolve()}")

    if args.geojson:
        out = Path(args.geojson)
        _save_json(out, route_map_to_geojson(route_map))
        console.print(f"Saved: {out.resolve()}")


if __name__ == "__main__":
    main()
