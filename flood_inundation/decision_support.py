"""
Decision Support Module – Local flood statistics and summary-report generation.
"""

import os
import json
import numpy as np
import rasterio

import config
from flood_inundation.raster_ops import pixel_area_km2, flood_area_km2, vectorize_mask


def compute_flood_statistics(flood_tif_path: str) -> tuple[dict, "gpd.GeoDataFrame"]:
    """
    Area statistics and polygons from a downloaded flood-risk GeoTIFF.
    Flood pixels are those equal to 1; everything else (0, nodata) is dry.

    Returns:
        (stats, polygons)
    """
    with rasterio.open(flood_tif_path) as src:
        band = src.read(1)
        transform = src.transform
        crs = src.crs
        nodata = src.nodata

    valid = np.ones(band.shape, dtype=bool)
    if nodata is not None:
        valid &= band != nodata
    if np.issubdtype(band.dtype, np.floating):
        valid &= ~np.isnan(band)

    flood = valid & (band == 1)

    geographic = crs is None or crs.is_geographic
    areas = pixel_area_km2(transform, band.shape, geographic=geographic)
    polygons = vectorize_mask(flood, transform, crs=crs.to_string() if crs else config.CRS)

    total_km2 = flood_area_km2(valid, areas)
    flooded_km2 = flood_area_km2(flood, areas)

    stats = {
        "total_pixels": int(valid.sum()),
        "flood_pixels": int(flood.sum()),
        "total_area_km2": round(total_km2, 2),
        "flood_area_km2": round(flooded_km2, 2),
        "flood_pct": round(flooded_km2 / total_km2 * 100, 2) if total_km2 > 0 else 0.0,
        "polygon_count": len(polygons),
    }
    print(f"[DSS] Local stats – flood {stats['flood_area_km2']} km² "
          f"({stats['flood_pct']}%) in {stats['polygon_count']} polygons")
    return stats, polygons


def save_polygons(polygons, out_dir: str = config.OUTPUT_DIR) -> str | None:
    """Write flood polygons as GeoJSON. Returns None when there is nothing to write."""
    if polygons.empty:
        print("[DSS] No flood polygons – GeoJSON not written")
        return None
    os.makedirs(out_dir, exist_ok=True)
    out_path = os.path.join(out_dir, config.LOCAL_POLYGONS_GEOJSON)
    polygons.to_file(out_path, driver="GeoJSON")
    print(f"[DSS] Polygons saved → {out_path}")
    return out_path


def generate_report(
    params: dict,
    server_area_km2: float,
    local_stats: dict = None,
    out_dir: str = config.OUTPUT_DIR,
) -> dict:
    """
    Generate a structured summary report (JSON) with a plain-text summary.
    """
    report = {
        "title": f"Flood Inundation Summary – {config.AOI_NAME}",
        "parameters": params,
        "flood_area_km2": server_area_km2,
        "local_statistics": local_stats or {},
    }

    lines = [
        f"═══ FLOOD INUNDATION SUMMARY ({config.AOI_NAME}) ═══",
        "",
        f"Rainfall window: {params.get('start_date')} → {params.get('end_date')}",
        f"Rule: elevation < {params.get('elevation_threshold_m')} m "
        f"AND rainfall > {params.get('rain_threshold_mm')} mm",
        "",
        f"Flood-prone area ({params.get('scale_m')} m): {server_area_km2:.2f} km²",
    ]

    if local_stats:
        lines += [
            "",
            f"Local check ({params.get('local_scale_m')} m):",
            f"  Flood area:  {local_stats['flood_area_km2']} km²  ({local_stats['flood_pct']}%)",
            f"  Polygons:    {local_stats['polygon_count']}",
        ]

    report["summary_text"] = "\n".join(lines)

    os.makedirs(out_dir, exist_ok=True)
    out_path = os.path.join(out_dir, config.REPORT_JSON)
    with open(out_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
    print(f"[DSS] Report saved → {out_path}")

    print()
    print(report["summary_text"])
    return report
