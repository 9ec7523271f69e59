"""
Raster Ops Module – NumPy rendition of the flood overlay for downloaded rasters.

Mirrors the server-side rules in flood_model.py so a GeoTIFF pulled down
with gee_data.download_geotiff() can be summarised and vectorised locally.
"""

import math
import numpy as np
import geopandas as gpd
from rasterio.features import shapes
from shapely.geometry import shape

import config

M_PER_DEG = 111_320  # metres per degree latitude


def heavy_rain_mask(rain: np.ndarray, threshold_mm: float = None) -> np.ndarray:
    """True where accumulated rainfall is strictly above the threshold. NaN → False."""
    threshold_mm = config.HEAVY_RAIN_MM if threshold_mm is None else threshold_mm
    return np.asarray(rain, dtype=np.float64) > threshold_mm


def flood_risk_mask(
    dem: np.ndarray,
    rain: np.ndarray,
    elevation_max_m: float = None,
    threshold_mm: float = None,
) -> np.ndarray:
    """True where elevation < threshold AND rainfall > threshold."""
    elevation_max_m = config.ELEVATION_MAX_M if elevation_max_m is None else elevation_max_m
    dem = np.asarray(dem, dtype=np.float64)
    if dem.shape != np.shape(rain):
        raise ValueError(f"DEM shape {dem.shape} does not match rainfall shape {np.shape(rain)}")
    return (dem < elevation_max_m) & heavy_rain_mask(rain, threshold_mm)


def pixel_area_km2(transform, shape_: tuple, geographic: bool = True) -> np.ndarray:
    """
    Per-pixel area in km² for a north-up grid.

    Geographic grids (degrees) shrink with latitude: each row uses the
    cosine of its centre latitude. Projected grids have constant area.
    """
    rows, cols = shape_
    if not geographic:
        return np.full((rows, cols), abs(transform.a * transform.e) / 1e6)

    centre_lats = transform.f + (np.arange(rows) + 0.5) * transform.e
    width_m = abs(transform.a) * M_PER_DEG * np.cos(np.radians(centre_lats))
    height_m = abs(transform.e) * M_PER_DEG
    row_area = width_m * height_m / 1e6
    return np.repeat(row_area[:, np.newaxis], cols, axis=1)


def flood_area_km2(mask: np.ndarray, pixel_area: np.ndarray) -> float:
    """Sum of pixel areas over exactly the True pixels; 0.0 for an empty mask."""
    mask = np.asarray(mask, dtype=bool)
    if mask.shape != pixel_area.shape:
        raise ValueError(f"Mask shape {mask.shape} does not match area shape {pixel_area.shape}")
    total = float(pixel_area[mask].sum())
    return 0.0 if math.isnan(total) else total


def vectorize_mask(mask: np.ndarray, transform, crs: str = config.CRS) -> gpd.GeoDataFrame:
    """
    Group 8-connected True pixels into polygons (one row per region).
    An all-False mask gives an empty GeoDataFrame.
    """
    mask = np.asarray(mask, dtype=bool)
    geoms = [
        shape(geom)
        for geom, _ in shapes(mask.astype(np.uint8), mask=mask, transform=transform, connectivity=8)
    ]
    return gpd.GeoDataFrame(
        {config.VECTOR_LABEL: [1] * len(geoms)},
        geometry=geoms,
        crs=crs,
    )
