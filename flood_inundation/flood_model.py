"""
Flood Risk Model – threshold overlay of low ground and heavy rainfall.

Model:
    HeavyRain(x) = RainSum(x) > HEAVY_RAIN_MM
    FloodRisk(x) = DEM(x) < ELEVATION_MAX_M  AND  HeavyRain(x)
    FloodArea    = Σ pixelArea(x) / 1e6  over FloodRisk(x) = 1   [km²]

Everything here builds server-side EE graphs; only compute_flood_area()
blocks on a getInfo() round trip.
"""

import ee
import config


def compute_heavy_rain(rain: ee.Image, threshold_mm: float = None) -> ee.Image:
    """Boolean mask: accumulated rainfall strictly above the threshold."""
    threshold_mm = config.HEAVY_RAIN_MM if threshold_mm is None else threshold_mm
    heavy = rain.gt(threshold_mm).rename(config.HEAVY_RAIN_BAND)
    print(f"[MODEL] Heavy rainfall mask: rain > {threshold_mm} mm")
    return heavy


def compute_flood_risk(
    dem: ee.Image,
    heavy_rain: ee.Image,
    elevation_max_m: float = None,
) -> ee.Image:
    """Boolean mask: elevation strictly below the threshold AND heavy rain."""
    elevation_max_m = config.ELEVATION_MAX_M if elevation_max_m is None else elevation_max_m
    flood_risk = dem.lt(elevation_max_m).And(heavy_rain).rename(config.FLOOD_RISK_BAND)
    print(f"[MODEL] Flood risk mask: elevation < {elevation_max_m} m AND heavy rain")
    return flood_risk


def area_from_stats(stats: dict) -> float:
    """
    Pull the summed area out of a reduceRegion() result.

    A missing key or null value means the reducer saw no unmasked pixels,
    which is reported as 0 km².
    """
    area = (stats or {}).get(config.AREA_BAND)
    if area is None:
        print("[MODEL] Area reduction returned no value – reporting 0 km²")
        return 0.0
    return float(area)


def compute_flood_area(
    flood_risk: ee.Image,
    aoi: ee.Geometry,
    scale: int = config.SCALE,
    max_pixels: float = config.MAX_PIXELS,
) -> float:
    """Sum per-pixel area (km²) over flood-risk pixels inside the AOI."""
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")

    pixel_area_km2 = ee.Image.pixelArea().divide(1e6)
    stats = pixel_area_km2.updateMask(flood_risk).reduceRegion(
        reducer=ee.Reducer.sum(),
        geometry=aoi,
        scale=scale,
        maxPixels=max_pixels,
    ).getInfo()

    area_km2 = area_from_stats(stats)
    print(f"[MODEL] Flood-prone area (km²): {area_km2:.4f}")
    return area_km2


def vectorize_flood_zones(
    flood_risk: ee.Image,
    aoi: ee.Geometry,
    scale: int = config.SCALE,
    max_pixels: float = config.MAX_PIXELS,
) -> ee.FeatureCollection:
    """Group contiguous flood-risk pixels into polygons."""
    vectors = flood_risk.selfMask().reduceToVectors(
        geometry=aoi,
        scale=scale,
        geometryType="polygon",
        labelProperty=config.VECTOR_LABEL,
        maxPixels=max_pixels,
    )
    print(f"[MODEL] Flood zones vectorised at {scale} m")
    return vectors


def build_area_summary(area_km2: float) -> ee.FeatureCollection:
    """One-row table (null geometry) carrying the flood area."""
    return ee.FeatureCollection([
        ee.Feature(None, {config.AREA_PROPERTY: area_km2})
    ])
