"""Tests for the parquet run logger.

Tests cover:
- Run folder bookkeeping and misuse before start_new_run()
- Part file writing and schema checking in ParquetWriter
- Merged parquet output, status log and session metadata
"""

import os
import json
import datetime

import pytest
import numpy as np
import pandas as pd
from unittest.mock import patch

from firebehavior.exceptions import FireBehaviorError
from firebehavior.utilities.data_classes import RunParams
from firebehavior.utilities.logger import Logger, make_json_serializable
from firebehavior.utilities.logger_schemas import CrownFireLogEntry, SurfaceFireLogEntry
from firebehavior.utilities.parquet_writer import ParquetWriter


# =============================================================================
# Fixtures
# =============================================================================

def _surface_entry(idx, ros_head=10.0, fli_head=50.0):
    return SurfaceFireLogEntry(
        scenario=idx, name=f"s{idx}", fuel_model=1, slope=0.0, aspect=180.0,
        midflame_wind_mph=5.0, wind_dir_from_upslope=0.0, reaction_intensity=1500.0,
        ros_head=ros_head, ros_back=1.0, ros_flank=2.0, head_dir_from_upslope=0.0,
        lw_ratio=2.0, hpua=300.0, fli_head=fli_head, flame_head=2.7,
        effective_wind_mph=5.0, wind_limit_exceeded=False, situation=2,
    )


def _crown_entry(idx, fire_type_name="Passive"):
    return CrownFireLogEntry(
        scenario=idx, name=f"s{idx}", wind_20ft_mph=20.0, canopy_height=60.0,
        canopy_base_height=6.0, canopy_bulk_density=0.011, foliar_moisture=1.0,
        fire_type=1, fire_type_name=fire_type_name, transition_ratio=1.5,
        active_ratio=0.5, crown_fraction_burned=0.2, active_ros=60.0, final_ros=20.0,
        final_fli=900.0, final_flame=18.0, final_hpua=2500.0, is_plume_dominated=False,
    )


@pytest.fixture
def logger(tmp_path):
    log = Logger(str(tmp_path / "logs"))
    log.start_new_run()
    return log


# =============================================================================
# ParquetWriter
# =============================================================================

class TestParquetWriter:
    """Tests for batched part file writing."""

    def test_empty_batch_writes_nothing(self, tmp_path):
        writer = ParquetWriter(str(tmp_path / "parts"), schema=SurfaceFireLogEntry)
        writer.write_batch([])
        assert os.listdir(tmp_path / "parts") == []
        assert writer.counter == 0

    def test_part_files_numbered(self, tmp_path):
        writer = ParquetWriter(str(tmp_path / "parts"), schema=SurfaceFireLogEntry)
        writer.write_batch([_surface_entry(0)])
        writer.write_batch([_surface_entry(1), _surface_entry(2)])
        assert sorted(os.listdir(tmp_path / "parts")) == ["part-00000.parquet", "part-00001.parquet"]

        df = pd.read_parquet(tmp_path / "parts" / "part-00001.parquet")
        assert list(df["scenario"]) == [1, 2]

    def test_wrong_schema_raises(self, tmp_path):
        writer = ParquetWriter(str(tmp_path / "parts"), schema=SurfaceFireLogEntry)
        with pytest.raises(TypeError, match="SurfaceFireLogEntry"):
            writer.write_batch([_crown_entry(0)])


# =============================================================================
# Logger
# =============================================================================

class TestLoggerRuns:
    """Tests for run folder handling."""

    def test_session_folder_name(self, tmp_path):
        log = Logger(str(tmp_path / "logs"))
        assert os.path.dirname(log.session_folder) == str(tmp_path / "logs")
        assert os.path.basename(log.session_folder).startswith("log_")
        assert log.run_folder is None

    def test_finish_before_run_raises(self, tmp_path):
        log = Logger(str(tmp_path / "logs"))
        with pytest.raises(FireBehaviorError, match="start_new_run"):
            log.finish()

    def test_flush_before_run_raises(self, tmp_path):
        log = Logger(str(tmp_path / "logs"))
        with pytest.raises(FireBehaviorError):
            log.flush()

    def test_run_counter(self, logger):
        assert logger.run_folder.endswith("run_0")
        logger.start_new_run()
        assert logger.run_folder.endswith("run_1")
        assert os.path.isdir(logger.run_folder)


class TestLoggerOutput:
    """Tests for merged results and status logs."""

    def test_finish_merges_part_files(self, logger):
        surface = [_surface_entry(0, ros_head=5.0), _surface_entry(1, ros_head=12.0)]
        crown = [_crown_entry(1)]

        logger.cache_surface_entries(surface[:1])
        logger.flush()
        logger.cache_surface_entries(surface[1:])
        logger.cache_crown_entries(crown)
        logger.finish(surface, crown)

        surface_df = pd.read_parquet(os.path.join(logger.run_folder, "surface_fire_logs.parquet"))
        crown_df = pd.read_parquet(os.path.join(logger.run_folder, "crown_fire_logs.parquet"))
        assert list(surface_df["name"]) == ["s0", "s1"]
        assert len(crown_df) == 1
        assert crown_df["fire_type_name"].iloc[0] == "Passive"

        assert not os.path.exists(os.path.join(logger.session_folder, "surface_fire_logs"))
        assert not os.path.exists(os.path.join(logger.session_folder, "crown_fire_logs"))

    def test_status_log_results(self, logger):
        surface = [_surface_entry(0, ros_head=5.0, fli_head=20.0),
                   _surface_entry(1, ros_head=12.0, fli_head=80.0)]
        crown = [_crown_entry(0, "Surface"), _crown_entry(1, "Active")]
        logger.cache_surface_entries(surface)
        logger.cache_crown_entries(crown)
        logger.finish(surface, crown)

        with open(os.path.join(logger.run_folder, "status_log.json")) as f:
            status = json.load(f)

        results = status["results"]
        assert results["scenarios run"] == 2
        assert results["crown scenarios run"] == 2
        assert results["max head ros (ft/min)"] == 12.0
        assert results["max head fli (btu/ft/s)"] == 80.0
        assert results["crown fires"] == 1
        assert status["latest_flush"] is not None

    def test_no_crown_entries(self, logger):
        surface = [_surface_entry(0)]
        logger.cache_surface_entries(surface)
        logger.finish(surface)

        assert not os.path.exists(os.path.join(logger.run_folder, "crown_fire_logs.parquet"))
        with open(os.path.join(logger.run_folder, "status_log.json")) as f:
            status = json.load(f)
        assert any("No parquet files found" in m for m in status["messages"])

    def test_flush_writes_through_writers(self, logger):
        with patch.object(logger.surface_writer, "write_batch") as surface_batch, \
                patch.object(logger.crown_writer, "write_batch") as crown_batch:
            logger.cache_surface_entries([_surface_entry(0)])
            logger.flush()
        surface_batch.assert_called_once()
        crown_batch.assert_called_once()
        assert os.path.exists(os.path.join(logger.run_folder, "status_log.json"))

    def test_metadata(self, logger, run_config_dict):
        params = RunParams.from_dict(run_config_dict)
        logger.log_metadata(params)

        with open(os.path.join(logger.session_folder, "metadata.json")) as f:
            metadata = json.load(f)
        assert metadata["description"] == "Grass and timber"
        assert metadata["scenario count"] == 2
        assert metadata["scenarios"][0]["canopy"] is None
        assert metadata["scenarios"][1]["canopy"]["height"] == 60.0
        assert metadata["scenarios"][0]["site"]["slope"] == 0.2


class TestJsonSerializable:
    """Tests for metadata conversion."""

    def test_numpy_and_dates(self):
        out = make_json_serializable({
            "arr": np.array([1.0, 2.0]),
            "scalar": np.float64(3.5),
            "when": datetime.datetime(2026, 7, 1, 12, 0),
            "nested": [np.int64(4), (1, 2)],
        })
        assert out["arr"] == [1.0, 2.0]
        assert out["scalar"] == 3.5
        assert isinstance(out["scalar"], float)
        assert out["when"] == "2026-07-01T12:00:00"
        assert out["nested"] == [4, (1, 2)]
        json.dumps(out)
