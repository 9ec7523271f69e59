"""Tests for the CLI wiring."""

from unittest.mock import MagicMock

import pytest

import config
import main
from flood_inundation import visualization


def test_defaults_match_config():
    args = main.parse_args([])
    assert args.start_date == config.START_DATE
    assert args.end_date == config.END_DATE
    assert args.rain_threshold == 200.0
    assert args.elevation_threshold == 50.0
    assert args.folder == "GEE_Exports"
    assert not args.no_export and not args.map and not args.local_summary


@pytest.fixture
def stubbed(monkeypatch):
    stubs = {}
    for name in [
        "initialize_ee", "create_aoi", "fetch_dem", "fetch_rainfall", "fetch_sar",
        "download_geotiff", "compute_heavy_rain", "compute_flood_risk",
        "vectorize_flood_zones", "build_area_summary", "start_exports",
        "create_flood_map", "compute_flood_statistics", "save_polygons", "generate_report",
    ]:
        stubs[name] = MagicMock(name=name)
        monkeypatch.setattr(main, name, stubs[name])
    stubs["compute_flood_area"] = MagicMock(return_value=321.0)
    monkeypatch.setattr(main, "compute_flood_area", stubs["compute_flood_area"])
    stubs["start_exports"].return_value = [MagicMock(id="T1"), MagicMock(id="T2"), MagicMock(id="T3")]
    return stubs


def test_pipeline_runs_in_order(stubbed):
    area = main.main([])

    assert area == 321.0
    stubbed["initialize_ee"].assert_called_once_with(config.GEE_PROJECT_ID)
    stubbed["compute_heavy_rain"].assert_called_once_with(stubbed["fetch_rainfall"].return_value, 200.0)
    stubbed["compute_flood_risk"].assert_called_once_with(
        stubbed["fetch_dem"].return_value, stubbed["compute_heavy_rain"].return_value, 50.0,
    )
    stubbed["build_area_summary"].assert_called_once_with(321.0)
    stubbed["start_exports"].assert_called_once()
    stubbed["create_flood_map"].assert_not_called()
    stubbed["download_geotiff"].assert_not_called()


def test_no_export(stubbed):
    main.main(["--no-export"])
    stubbed["start_exports"].assert_not_called()


def test_map_and_local_summary(stubbed):
    stubbed["compute_flood_statistics"].return_value = ({"polygon_count": 0}, MagicMock())
    main.main(["--no-export", "--map", "--local-summary", "--local-scale", "500"])

    stubbed["create_flood_map"].assert_called_once()
    assert stubbed["download_geotiff"].call_args.kwargs["scale"] == 500
    report_kwargs = stubbed["generate_report"].call_args.kwargs
    assert report_kwargs["server_area_km2"] == 321.0
    assert report_kwargs["params"]["local_scale_m"] == 500


def test_map_passes_overrides(stubbed):
    main.main(["--no-export", "--map", "--rain-threshold", "250", "--elevation-threshold", "20",
               "--start-date", "2022-08-01", "--end-date", "2022-09-01"])

    kwargs = stubbed["create_flood_map"].call_args.kwargs
    assert kwargs["rain_threshold_mm"] == 250.0
    assert kwargs["elevation_max_m"] == 20.0
    assert kwargs["start_date"] == "2022-08-01"
    assert kwargs["end_date"] == "2022-09-01"


def test_map_labels_end_to_end(stubbed, monkeypatch, mock_ee, tmp_path):
    added = []
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(visualization, "ee", mock_ee)
    monkeypatch.setattr(
        visualization, "_add_ee_layer",
        lambda m, image, vis, name: added.append(name),
    )
    monkeypatch.setattr(main, "create_flood_map", visualization.create_flood_map)
    aoi = stubbed["create_aoi"].return_value
    aoi.centroid.return_value.coordinates.return_value.getInfo.return_value = [85.5, 20.5]

    main.main(["--no-export", "--map", "--rain-threshold", "250", "--elevation-threshold", "20"])

    assert "Rainfall > 250mm" in added
    with open(tmp_path / config.OUTPUT_DIR / config.FLOOD_MAP_HTML, encoding="utf-8") as f:
        html = f.read()
    assert "Heavy Rainfall (>250mm)" in html
    assert "Potential Flood-prone (<20m elevation)" in html
    assert "200mm" not in html
