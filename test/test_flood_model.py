"""Tests for the Earth Engine graph builders (ee is mocked, no credentials needed)."""

from unittest.mock import MagicMock

import pytest

import config
from flood_inundation import flood_model


@pytest.fixture
def patched_ee(monkeypatch, mock_ee):
    monkeypatch.setattr(flood_model, "ee", mock_ee)
    return mock_ee


class TestMasks:
    def test_heavy_rain_uses_strict_threshold(self):
        rain = MagicMock()
        heavy = flood_model.compute_heavy_rain(rain)

        rain.gt.assert_called_once_with(200.0)
        rain.gt.return_value.rename.assert_called_once_with("HeavyRain")
        assert heavy is rain.gt.return_value.rename.return_value

    def test_heavy_rain_override(self):
        rain = MagicMock()
        flood_model.compute_heavy_rain(rain, threshold_mm=0)
        rain.gt.assert_called_once_with(0)

    def test_flood_risk_combines_dem_and_rain(self):
        dem, heavy = MagicMock(), MagicMock()
        risk = flood_model.compute_flood_risk(dem, heavy)

        dem.lt.assert_called_once_with(50.0)
        dem.lt.return_value.And.assert_called_once_with(heavy)
        dem.lt.return_value.And.return_value.rename.assert_called_once_with("FloodRisk")
        assert risk is dem.lt.return_value.And.return_value.rename.return_value


class TestAreaFromStats:
    def test_value(self):
        assert flood_model.area_from_stats({"area": 12.5}) == 12.5

    @pytest.mark.parametrize("stats", [{}, {"area": None}, None])
    def test_missing_is_zero(self, stats):
        assert flood_model.area_from_stats(stats) == 0.0


class TestComputeFloodArea:
    def test_reduction_parameters(self, patched_ee, aoi):
        flood_risk = MagicMock()
        pixel_km2 = patched_ee.Image.pixelArea.return_value.divide.return_value
        reduce_region = pixel_km2.updateMask.return_value.reduceRegion
        reduce_region.return_value.getInfo.return_value = {"area": 1234.5}

        area = flood_model.compute_flood_area(flood_risk, aoi)

        assert area == 1234.5
        patched_ee.Image.pixelArea.return_value.divide.assert_called_once_with(1e6)
        pixel_km2.updateMask.assert_called_once_with(flood_risk)
        reduce_region.assert_called_once_with(
            reducer=patched_ee.Reducer.sum.return_value,
            geometry=aoi,
            scale=30,
            maxPixels=1e13,
        )

    def test_no_flood_pixels(self, patched_ee, aoi):
        pixel_km2 = patched_ee.Image.pixelArea.return_value.divide.return_value
        pixel_km2.updateMask.return_value.reduceRegion.return_value.getInfo.return_value = {"area": None}
        assert flood_model.compute_flood_area(MagicMock(), aoi) == 0.0

    def test_bad_scale(self, patched_ee, aoi):
        with pytest.raises(ValueError):
            flood_model.compute_flood_area(MagicMock(), aoi, scale=0)


def test_vectorize_flood_zones(aoi):
    flood_risk = MagicMock()
    vectors = flood_model.vectorize_flood_zones(flood_risk, aoi)

    flood_risk.selfMask.return_value.reduceToVectors.assert_called_once_with(
        geometry=aoi,
        scale=30,
        geometryType="polygon",
        labelProperty="flood",
        maxPixels=1e13,
    )
    assert vectors is flood_risk.selfMask.return_value.reduceToVectors.return_value


def test_build_area_summary(patched_ee):
    summary = flood_model.build_area_summary(42.0)

    patched_ee.Feature.assert_called_once_with(None, {config.AREA_PROPERTY: 42.0})
    patched_ee.FeatureCollection.assert_called_once_with([patched_ee.Feature.return_value])
    assert summary is patched_ee.FeatureCollection.return_value
