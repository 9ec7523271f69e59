"""
Visualization Module – Interactive Folium/Leaflet preview of the flood layers.

Earth Engine objects are rendered server-side and streamed as XYZ tiles.
"""

import os
import ee
import folium
from folium.plugins import MiniMap

import config


def aoi_center(aoi: ee.Geometry) -> tuple[float, float]:
    """(lat, lon) of the AOI centroid, fetched from Earth Engine."""
    lon, lat = aoi.centroid(maxError=1).coordinates().getInfo()
    return lat, lon


def create_flood_map(
    aoi: ee.Geometry,
    dem: ee.Image,
    rain: ee.Image,
    sar: ee.Image,
    heavy_rain: ee.Image,
    flood_risk: ee.Image,
    flood_vectors: ee.FeatureCollection = None,
    out_path: str = None,
    rain_threshold_mm: float = config.HEAVY_RAIN_MM,
    elevation_max_m: float = config.ELEVATION_MAX_M,
    start_date: str = config.START_DATE,
    end_date: str = config.END_DATE,
) -> str:
    """
    Build a Folium map centred on the AOI with:
      1. AOI outline
      2. DEM, total rainfall and Sentinel-1 VV reference layers
      3. Heavy rainfall and potential flood zones (masked to True pixels)
      4. Flood-prone polygons
      5. Two-entry legend
    Layer names and legend rows carry the thresholds and date window
    the masks were built with.
    Saves to output/ and returns the file path.
    """
    m = folium.Map(
        location=list(aoi_center(aoi)),
        zoom_start=config.MAP_ZOOM,
        tiles="CartoDB positron",
    )

    aoi_outline = ee.FeatureCollection([ee.Feature(aoi)]).style(
        color=config.VIS_AOI["color"], fillColor="00000000",
    )
    _add_ee_layer(m, aoi_outline, {}, f"AOI: {config.AOI_NAME}")
    _add_ee_layer(m, dem, config.VIS_DEM, "DEM")
    _add_ee_layer(m, rain, config.VIS_RAIN, f"Total Rainfall {start_date} → {end_date}")

    # Radar sits under the decision layers
    _add_ee_layer(m, sar, config.VIS_SAR, f"Sentinel-1 {config.SAR_BAND}")

    _add_ee_layer(m, heavy_rain.updateMask(heavy_rain), config.VIS_HEAVY_RAIN,
                  f"Rainfall > {rain_threshold_mm:g}mm")
    _add_ee_layer(m, flood_risk.updateMask(flood_risk), config.VIS_FLOOD_RISK,
                  "Potential Flood Zones")

    if flood_vectors is not None:
        polygons = flood_vectors.style(color=config.VIS_POLYGONS["color"])
        _add_ee_layer(m, polygons, {}, "Flood-prone Polygons")

    legend = legend_html(entries=legend_entries(rain_threshold_mm, elevation_max_m))
    m.get_root().html.add_child(folium.Element(legend))

    MiniMap(toggle_display=True).add_to(m)
    folium.LayerControl().add_to(m)

    if out_path is None:
        os.makedirs(config.OUTPUT_DIR, exist_ok=True)
        out_path = os.path.join(config.OUTPUT_DIR, config.FLOOD_MAP_HTML)
    m.save(out_path)
    print(f"[VIS] Map saved → {out_path}")
    return out_path


# ── Private helpers ──────────────────────────────────────────────────────────

def _add_ee_layer(m: folium.Map, image: ee.Image, vis_params: dict, name: str):
    """Attach an EE image as a tile layer."""
    map_id = image.getMapId(vis_params)
    folium.TileLayer(
        tiles=map_id["tile_fetcher"].url_format,
        attr="Google Earth Engine",
        name=name,
        overlay=True,
        control=True,
    ).add_to(m)


def legend_entries(
    rain_threshold_mm: float = config.HEAVY_RAIN_MM,
    elevation_max_m: float = config.ELEVATION_MAX_M,
) -> list[tuple[str, str]]:
    """(colour, label) rows with the thresholds filled in."""
    return [
        (color, label.format(rain=rain_threshold_mm, elev=elevation_max_m))
        for color, label in config.LEGEND_ENTRIES
    ]


def legend_html(title: str = None, entries: list = None) -> str:
    """Fixed bottom-right legend: one coloured box + label per entry."""
    title = title or config.LEGEND_TITLE
    entries = entries or legend_entries()

    rows = "".join(
        f'<div style="display:flex;align-items:center;margin-top:4px;">'
        f'<span style="background:{color};width:16px;height:16px;'
        f'display:inline-block;margin:0 6px 0 0;"></span>{label}</div>'
        for color, label in entries
    )
    return (
        '<div style="position:fixed;bottom:30px;right:10px;z-index:9999;'
        'padding:8px;background-color:white;font-size:13px;">'
        f'<b>{title}</b>{rows}</div>'
    )
