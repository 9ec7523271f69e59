#!/usr/bin/env python3
"""
main.py – CLI entry point for the Mahanadi Basin Flood Inundation Mapping.

Usage:
    python main.py
    python main.py --map --local-summary
    python main.py --start-date 2022-08-01 --end-date 2022-08-31 --no-export

The pipeline:
    1. Authenticate & initialise GEE, build the AOI polygon
    2. Fetch DEM, accumulate CHIRPS rainfall, mosaic Sentinel-1 VV
    3. Heavy rainfall mask (rain > 200 mm)
    4. Flood risk mask (elevation < 50 m AND heavy rain)
    5. Flood-prone area in km² (30 m reduction)
    6. Vectorise flood zones
    7. Submit Drive exports (raster, polygons, area summary)
    8. Optional: interactive Folium map, local summary report
"""

import argparse
import sys
import os

# Ensure project root is on the path so `import config` works
sys.path.insert(0, os.path.dirname(__file__))

import config
from flood_inundation.gee_data import (
    initialize_ee, create_aoi, fetch_dem, fetch_rainfall, fetch_sar, download_geotiff,
)
from flood_inundation.flood_model import (
    compute_heavy_rain, compute_flood_risk, compute_flood_area,
    vectorize_flood_zones, build_area_summary,
)
from flood_inundation.exports import start_exports
from flood_inundation.visualization import create_flood_map
from flood_inundation.decision_support import compute_flood_statistics, save_polygons, generate_report


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Flood inundation screening for the Mahanadi Basin (DEM × CHIRPS rainfall)",
    )
    p.add_argument("--project", default=config.GEE_PROJECT_ID, help="Earth Engine cloud project")
    p.add_argument("--start-date", default=config.START_DATE, help="Rainfall window start (YYYY-MM-DD)")
    p.add_argument("--end-date", default=config.END_DATE, help="Rainfall window end, exclusive (YYYY-MM-DD)")
    p.add_argument("--rain-threshold", type=float, default=config.HEAVY_RAIN_MM,
                   help="Heavy rainfall threshold in mm")
    p.add_argument("--elevation-threshold", type=float, default=config.ELEVATION_MAX_M,
                   help="Low-lying elevation threshold in m")
    p.add_argument("--folder", default=config.EXPORT_FOLDER, help="Google Drive export folder")
    p.add_argument("--no-export", action="store_true", help="Skip the Drive export tasks")
    p.add_argument("--map", action="store_true", help="Write the interactive Folium map")
    p.add_argument("--local-summary", action="store_true",
                   help="Download the flood raster and write local stats + report")
    p.add_argument("--local-scale", type=int, default=config.LOCAL_SCALE,
                   help="Download scale in metres for --local-summary")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    print("=" * 60)
    print(f"  FLOOD INUNDATION MAPPING  ({config.AOI_NAME})")
    print("=" * 60)
    print(f"  Rainfall window: {args.start_date} → {args.end_date}")
    print(f"  Heavy rain: > {args.rain_threshold} mm")
    print(f"  Low-lying:  < {args.elevation_threshold} m")
    print("=" * 60)

    # ── Phase 1: GEE Setup ──────────────────────────────────────────────
    print("\n▶ Phase 1 – GEE Initialisation")
    initialize_ee(args.project)
    aoi = create_aoi()

    # ── Phase 2: Data Fetch ─────────────────────────────────────────────
    print("\n▶ Phase 2 – DEM, Rainfall & Radar")
    dem = fetch_dem(aoi)
    rain = fetch_rainfall(aoi, args.start_date, args.end_date)
    sar = fetch_sar(aoi, args.start_date, args.end_date)

    # ── Phase 3: Flood Risk Overlay ─────────────────────────────────────
    print("\n▶ Phase 3 – Flood Risk Overlay")
    heavy_rain = compute_heavy_rain(rain, args.rain_threshold)
    flood_risk = compute_flood_risk(dem, heavy_rain, args.elevation_threshold)

    # ── Phase 4: Area & Vectors ─────────────────────────────────────────
    print("\n▶ Phase 4 – Flood Area & Vectorisation")
    flood_area_km2 = compute_flood_area(flood_risk, aoi)
    flood_vectors = vectorize_flood_zones(flood_risk, aoi)
    summary = build_area_summary(flood_area_km2)

    # ── Phase 5: Exports ────────────────────────────────────────────────
    tasks = []
    if not args.no_export:
        print("\n▶ Phase 5 – Drive Exports")
        tasks = start_exports(flood_risk, flood_vectors, summary, aoi, folder=args.folder)

    # ── Phase 6: Visualization ──────────────────────────────────────────
    map_path = None
    if args.map:
        print("\n▶ Phase 6 – Visualization")
        map_path = create_flood_map(
            aoi, dem, rain, sar, heavy_rain, flood_risk, flood_vectors,
            rain_threshold_mm=args.rain_threshold,
            elevation_max_m=args.elevation_threshold,
            start_date=args.start_date,
            end_date=args.end_date,
        )

    # ── Phase 7: Local Summary ──────────────────────────────────────────
    report_path = None
    if args.local_summary:
        print("\n▶ Phase 7 – Local Summary")
        tif_path = download_geotiff(flood_risk.toByte(), aoi, scale=args.local_scale)
        local_stats, polygons = compute_flood_statistics(tif_path)
        save_polygons(polygons)
        generate_report(
            params={
                "start_date": args.start_date,
                "end_date": args.end_date,
                "rain_threshold_mm": args.rain_threshold,
                "elevation_threshold_m": args.elevation_threshold,
                "scale_m": config.SCALE,
                "local_scale_m": args.local_scale,
            },
            server_area_km2=flood_area_km2,
            local_stats=local_stats,
        )
        report_path = os.path.join(config.OUTPUT_DIR, config.REPORT_JSON)

    print("\n" + "=" * 60)
    print("  ✅  Pipeline complete!")
    print(f"  📐  Flood-prone area → {flood_area_km2:.2f} km²")
    for task in tasks:
        print(f"  📤  Export task      → {task.id}")
    if map_path:
        print(f"  🗺️   Interactive map → {map_path}")
    if report_path:
        print(f"  📊  Report          → {report_path}")
    print("=" * 60)
    return flood_area_km2


if __name__ == "__main__":
    main()
