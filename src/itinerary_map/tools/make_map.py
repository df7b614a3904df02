from __future__ import annotations

import json
from pathlib import Path


CATEGORY_COLOR = {
    "embark": "#22c55e",
    "disembark": "#ef4444",
    "port": "#3b82f6",
    "tender": "#84cc16",
    "private_island": "#eab308",
    "scenic": "#14b8a6",
}


def main() -> None:
    trips_dir = Path("trips")
    route_path = trips_dir / "last_route_map.json"
    out_path = trips_dir / "last_route_map.html"

    route_map = json.loads(route_path.read_text(encoding="utf-8"))
    stops = route_map.get("route_stops", [])
    if not stops:
        raise SystemExit("No mappable stops found in trips/last_route_map.json")

    # Leaflet wants [lat, lon]; the route map stores [lon, lat]
    line = [[lat, lon] for lon, lat in route_map.get("path", [])]
    markers = []
    for s in stops:
        category = "embark" if s.get("is_round_trip_anchor") else s.get("category", "port")
        markers.append(
            {
                "latlon": [s["coordinates"]["lat"], s["coordinates"]["lon"]],
                "name": s.get("display_name"),
                "days": s.get("visit_days", []),
                "color": CATEGORY_COLOR.get(category, "#3b82f6"),
            }
        )
    arrows = [
        {"latlon": [b["point"][1], b["point"][0]], "bearing": b["bearing_deg"]}
        for b in route_map.get("bearings", [])
    ]

    html = f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Itinerary Map – Last Run</title>
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css" />
  <style>
    body {{ margin: 0; font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; }}
    #map {{ height: 100vh; width: 100vw; }}
    .arrow {{ font-size: 18px; color: #1e3a8a; }}
  </style>
</head>
<body>
<div id="map"></div>
<script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
<script>
  const line = {json.dumps(line)};
  const markers = {json.dumps(markers)};
  const arrows = {json.dumps(arrows)};

  const map = L.map('map');

  L.tileLayer('https://{{s}}.tile.openstreetmap.org/{{z}}/{{x}}/{{y}}.png', {{
    maxZoom: 18,
    attribution: '&copy; OpenStreetMap contributors'
  }}).addTo(map);

  if (line.length > 1) {{
    L.polyline(line, {{ color: '#2563eb', weight: 3, opacity: 0.8, dashArray: '6 6' }}).addTo(map);
  }}

  markers.forEach((m) => {{
    const popup = `<b>${{m.name}}</b><br/>Day ${{m.days.join(' & ')}}`;
    L.circleMarker(m.latlon, {{ radius: 8, color: m.color, fillOpacity: 0.9 }}).addTo(map).bindPopup(popup);
  }});

  arrows.forEach((a) => {{
    const icon = L.divIcon({{
      className: 'arrow',
      html: `<div style="transform: rotate(${{a.bearing}}deg)">&#x25B2;</div>`,
    }});
    L.marker(a.latlon, {{ icon }}).addTo(map);
  }});

  // fit bounds
  const bounds = L.latLngBounds(markers.map(m => m.latlon).concat(line));
  map.fitBounds(bounds.pad(0.2));
</script>
</body>
</html>
"""
    out_path.write_text(html, encoding="utf-8")
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
