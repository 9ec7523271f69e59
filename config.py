"""
Configuration constants for the Mahanadi Basin Flood Inundation Mapping.

Model: FloodRisk(x) = (DEM(x) < ELEVATION_MAX_M) AND (RainSum(x) > HEAVY_RAIN_MM)
  RainSum = CHIRPS daily precipitation summed over the date window.
"""

# ── Google Earth Engine ──────────────────────────────────────────────────────
GEE_PROJECT_ID = "gisproj-487215"

# ── Area of Interest (Mahanadi Basin bounding box, Odisha) ───────────────────
# Closed ring of (lon, lat) pairs.
AOI_COORDS = [
    [84.0, 19.0],
    [84.0, 22.0],
    [87.0, 22.0],
    [87.0, 19.0],
    [84.0, 19.0],
]
AOI_NAME = "Mahanadi Basin"
MAP_ZOOM = 7

# ── Data Sources (GEE asset IDs) ────────────────────────────────────────────
DEM_ASSET = "USGS/SRTMGL1_003"
RAIN_COLLECTION = "UCSB-CHG/CHIRPS/DAILY"
SAR_COLLECTION = "COPERNICUS/S1_GRD"
SAR_INSTRUMENT_MODE = "IW"
SAR_BAND = "VV"

# ── Rainfall Accumulation Window ─────────────────────────────────────────────
# filterDate() treats END_DATE as exclusive.
START_DATE = "2022-07-01"
END_DATE = "2022-07-31"

# ── Thresholds ──────────────────────────────────────────────────────────────
HEAVY_RAIN_MM = 200.0     # accumulated rainfall above this → heavy rain
ELEVATION_MAX_M = 50.0    # ground below this → low-lying

# ── Processing ───────────────────────────────────────────────────────────────
SCALE = 30               # metres – native SRTM resolution
MAX_PIXELS = 1e13
CRS = "EPSG:4326"
LOCAL_SCALE = 1000       # metres – coarse download for local summary

# Band / property names
HEAVY_RAIN_BAND = "HeavyRain"
FLOOD_RISK_BAND = "FloodRisk"
AREA_BAND = "area"
VECTOR_LABEL = "flood"
AREA_PROPERTY = "FloodArea_km2"

# ── Drive Exports ───────────────────────────────────────────────────────────
EXPORT_FOLDER = "GEE_Exports"
RASTER_EXPORT_NAME = "MahanadiBasin_FloodRiskRaster"
POLYGON_EXPORT_NAME = "MahanadiBasin_FloodRiskPolygons"
SUMMARY_EXPORT_NAME = "MahanadiBasin_FloodAreaSummary"
POLYGON_FORMAT = "SHP"
SUMMARY_FORMAT = "CSV"

# ── Visualisation ───────────────────────────────────────────────────────────
VIS_AOI = {"color": "red"}
VIS_DEM = {"min": 0, "max": 200, "palette": ["white", "green"]}
VIS_RAIN = {"min": 0, "max": 300, "palette": ["white", "blue"]}
VIS_SAR = {"min": -25, "max": 0}
VIS_HEAVY_RAIN = {"palette": ["blue"]}
VIS_FLOOD_RISK = {"palette": ["red"]}
VIS_POLYGONS = {"color": "red"}

LEGEND_TITLE = "Flood Risk Legend"
# Labels are formatted with the active thresholds (rain in mm, elev in m).
LEGEND_ENTRIES = [
    ("blue", "Heavy Rainfall (>{rain:g}mm)"),
    ("red", "Potential Flood-prone (<{elev:g}m elevation)"),
]

# ── Output Paths ────────────────────────────────────────────────────────────
OUTPUT_DIR = "output"
FLOOD_MAP_HTML = "flood_inundation_map.html"
LOCAL_RISK_GEOTIFF = "flood_risk_local.tif"
LOCAL_POLYGONS_GEOJSON = "flood_risk_polygons.geojson"
REPORT_JSON = "flood_summary.json"
