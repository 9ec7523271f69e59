"""
GEE Data Module – Authentication, AOI creation, and remote-sensing data fetch.
"""

import os
from datetime import date

import ee
import config


def initialize_ee(project_id: str = config.GEE_PROJECT_ID) -> None:
    """Authenticate (if needed) and initialise Earth Engine."""
    try:
        ee.Initialize(project=project_id)
    except Exception:
        ee.Authenticate()
        ee.Initialize(project=project_id)
    print(f"[GEE] Initialised with project: {project_id}")


def validate_ring(coords: list) -> list:
    """
    Check that coords is a closed (lon, lat) ring with at least four positions.
    Returns the ring unchanged.
    """
    if len(coords) < 4:
        raise ValueError(f"AOI ring needs at least 4 positions, got {len(coords)}")
    if list(coords[0]) != list(coords[-1]):
        raise ValueError(f"AOI ring is not closed: {coords[0]} != {coords[-1]}")
    return coords


def create_aoi(coords: list = None) -> ee.Geometry:
    """Return the AOI polygon built from a closed ring of (lon, lat) pairs."""
    ring = validate_ring(config.AOI_COORDS if coords is None else coords)
    aoi = ee.Geometry.Polygon([ring])
    print(f"[GEE] AOI created – {len(ring) - 1} vertices, ring {ring[0]} … {ring[-2]}")
    return aoi


def validate_date_window(start_date: str, end_date: str) -> None:
    """Both dates must be YYYY-MM-DD and the end must come after the start."""
    try:
        start, end = date.fromisoformat(start_date), date.fromisoformat(end_date)
    except ValueError as e:
        raise ValueError(f"Dates must be YYYY-MM-DD: {start_date!r}, {end_date!r}") from e
    if start >= end:
        raise ValueError(f"Empty date window: {start_date} → {end_date}")


# ── DEM ──────────────────────────────────────────────────────────────────────

def fetch_dem(aoi: ee.Geometry) -> ee.Image:
    """Fetch SRTM DEM (30 m) clipped to AOI."""
    dem = ee.Image(config.DEM_ASSET).clip(aoi)
    print(f"[GEE] DEM fetched ({config.DEM_ASSET})")
    return dem


# ── Rainfall ─────────────────────────────────────────────────────────────────

def fetch_rainfall(
    aoi: ee.Geometry,
    start_date: str = config.START_DATE,
    end_date: str = config.END_DATE,
) -> ee.Image:
    """Sum CHIRPS daily precipitation (mm) over the date window, clipped to AOI."""
    validate_date_window(start_date, end_date)
    rain = (
        ee.ImageCollection(config.RAIN_COLLECTION)
        .filterBounds(aoi)
        .filterDate(start_date, end_date)
        .sum()
        .clip(aoi)
    )
    print(f"[GEE] Rainfall accumulated {start_date} → {end_date}")
    return rain


# ── Sentinel-1 ───────────────────────────────────────────────────────────────

def fetch_sar(
    aoi: ee.Geometry,
    start_date: str = config.START_DATE,
    end_date: str = config.END_DATE,
) -> ee.Image:
    """
    Sentinel-1 VV mosaic for visual reference only.
    Nothing downstream reads its values.
    """
    validate_date_window(start_date, end_date)
    s1 = (
        ee.ImageCollection(config.SAR_COLLECTION)
        .filterBounds(aoi)
        .filterDate(start_date, end_date)
        .filter(ee.Filter.eq("instrumentMode", config.SAR_INSTRUMENT_MODE))
        .select(config.SAR_BAND)
        .mosaic()
        .clip(aoi)
    )
    print(f"[GEE] Sentinel-1 {config.SAR_BAND} mosaic ({config.SAR_INSTRUMENT_MODE} mode)")
    return s1


# ── Local GeoTIFF download ──────────────────────────────────────────────────

def download_geotiff(
    image: ee.Image,
    aoi: ee.Geometry,
    filename: str = config.LOCAL_RISK_GEOTIFF,
    scale: int = config.LOCAL_SCALE,
) -> str:
    """
    Download an EE image to a local GeoTIFF via geemap.
    Returns the output file path.
    """
    import geemap

    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")

    os.makedirs(config.OUTPUT_DIR, exist_ok=True)
    out_path = os.path.join(config.OUTPUT_DIR, filename)

    geemap.ee_export_image(
        image,
        filename=out_path,
        scale=scale,
        region=aoi,
        crs=config.CRS,
        file_per_band=False,
    )
    print(f"[GEE] GeoTIFF downloaded at {scale} m → {out_path}")
    return out_path
