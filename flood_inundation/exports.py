"""
Export Module – Submit flood results to Google Drive as batch tasks.

Tasks are started and left to run on the Earth Engine side; nothing here
polls or waits for them.
"""

import ee
import config


def export_flood_raster(
    flood_risk: ee.Image,
    aoi: ee.Geometry,
    folder: str = config.EXPORT_FOLDER,
    scale: int = config.SCALE,
    max_pixels: float = config.MAX_PIXELS,
):
    """Single-band byte GeoTIFF of the flood-risk mask."""
    task = ee.batch.Export.image.toDrive(
        image=flood_risk.toByte(),
        description=config.RASTER_EXPORT_NAME,
        folder=folder,
        fileNamePrefix=config.RASTER_EXPORT_NAME,
        region=aoi,
        scale=scale,
        maxPixels=max_pixels,
    )
    task.start()
    print(f"[EXPORT] Raster task started → {folder}/{config.RASTER_EXPORT_NAME} (id {task.id})")
    return task


def export_flood_polygons(
    vectors: ee.FeatureCollection,
    folder: str = config.EXPORT_FOLDER,
):
    """Flood-risk polygons as a shapefile."""
    task = ee.batch.Export.table.toDrive(
        collection=vectors,
        description=config.POLYGON_EXPORT_NAME,
        folder=folder,
        fileNamePrefix=config.POLYGON_EXPORT_NAME,
        fileFormat=config.POLYGON_FORMAT,
    )
    task.start()
    print(f"[EXPORT] Polygon task started → {folder}/{config.POLYGON_EXPORT_NAME} (id {task.id})")
    return task


def export_area_summary(
    summary: ee.FeatureCollection,
    folder: str = config.EXPORT_FOLDER,
):
    """One-row CSV holding FloodArea_km2."""
    task = ee.batch.Export.table.toDrive(
        collection=summary,
        description=config.SUMMARY_EXPORT_NAME,
        folder=folder,
        fileNamePrefix=config.SUMMARY_EXPORT_NAME,
        fileFormat=config.SUMMARY_FORMAT,
    )
    task.start()
    print(f"[EXPORT] Summary task started → {folder}/{config.SUMMARY_EXPORT_NAME} (id {task.id})")
    return task


def start_exports(
    flood_risk: ee.Image,
    vectors: ee.FeatureCollection,
    summary: ee.FeatureCollection,
    aoi: ee.Geometry,
    folder: str = config.EXPORT_FOLDER,
) -> list:
    """Submit all three exports. Returns the started tasks."""
    return [
        export_flood_raster(flood_risk, aoi, folder=folder),
        export_flood_polygons(vectors, folder=folder),
        export_area_summary(summary, folder=folder),
    ]
