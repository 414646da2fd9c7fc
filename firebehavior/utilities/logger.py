import os
from firebehavior.exceptions import FireBehaviorError
from firebehavior.utilities.logger_schemas import SurfaceFireLogEntry, CrownFireLogEntry
from firebehavior.utilities.parquet_writer import ParquetWriter
from firebehavior.utilities.data_classes import RunParams
import pyarrow as pa
import pyarrow.parquet as pq
from dataclasses import asdict
import datetime
import numpy as np
import json
import pandas as pd
import glob
import shutil

class Logger:
    """Writes scenario results of a run to parquet files.

    Entries are cached in memory, flushed in batches to part files in the
    session folder and merged into one file per log type by :meth:`finish`.

    Layout::

        <log_folder>/log_<datetime>/
            metadata.json
            run_0/
                surface_fire_logs.parquet
                crown_fire_logs.parquet
                status_log.json
    """
    def __init__(self, log_folder: str):

        self.log_ctr = 0
        self._run_folder = None

        self.log_folder = log_folder
        os.makedirs(self.log_folder, exist_ok=True)

        self._session_folder = self.generate_session_folder()

        self.surface_writer = ParquetWriter(
            os.path.join(self._session_folder, "surface_fire_logs"), schema=SurfaceFireLogEntry
        )

        self.crown_writer = ParquetWriter(
            os.path.join(self._session_folder, "crown_fire_logs"), schema=CrownFireLogEntry
        )

        self._surface_cache = []
        self._crown_cache = []

        self._status_log = {
            "run_start": datetime.datetime.now().isoformat(),
            "messages": [],
            "latest_flush": None,
            "results": None
        }

    @property
    def session_folder(self) -> str:
        return self._session_folder

    @property
    def run_folder(self) -> str:
        return self._run_folder

    def cache_surface_entries(self, entries):
        self._surface_cache.extend(entries)

    def cache_crown_entries(self, entries):
        self._crown_cache.extend(entries)

    def flush(self):
        self._require_run("flush")

        self.surface_writer.write_batch(self._surface_cache)
        self._surface_cache.clear()

        self.crown_writer.write_batch(self._crown_cache)
        self._crown_cache.clear()

        self._status_log["latest_flush"] = datetime.datetime.now().isoformat()
        self._write_status_log()

    def write_results(self, surface_entries, crown_entries):
        surface_entries = list(surface_entries)
        crown_entries = list(crown_entries)

        self._status_log["results"] = {
            "scenarios run": len(surface_entries),
            "crown scenarios run": len(crown_entries),
            "max head ros (ft/min)": max((e.ros_head for e in surface_entries), default=0.0),
            "max head fli (btu/ft/s)": max((e.fli_head for e in surface_entries), default=0.0),
            "crown fires": sum(1 for e in crown_entries if e.fire_type_name in ("Passive", "Active"))
        }

    def finish(self, surface_entries=(), crown_entries=()):
        self._require_run("finish")

        self.write_results(surface_entries, crown_entries)
        self.flush()

        surface_log_path = os.path.join(self._session_folder, "surface_fire_logs")
        crown_log_path = os.path.join(self._session_folder, "crown_fire_logs")

        self._merge_parquet_files(
            surface_log_path,
            os.path.join(self._run_folder, "surface_fire_logs.parquet")
        )

        self._merge_parquet_files(
            crown_log_path,
            os.path.join(self._run_folder, "crown_fire_logs.parquet")
        )

        # Delete the temporary folders after merging
        if os.path.exists(surface_log_path):
            shutil.rmtree(surface_log_path)

        if os.path.exists(crown_log_path):
            shutil.rmtree(crown_log_path)

    def _merge_parquet_files(self, folder_path: str, output_file: str):

        parquet_files = sorted(glob.glob(os.path.join(folder_path, "part-*.parquet")))

        if not parquet_files:
            self.log_message(f"No parquet files found in {folder_path}")
            self._write_status_log()
            return

        dfs = [pd.read_parquet(f) for f in parquet_files]
        combined_df = pd.concat(dfs, ignore_index=True)

        table = pa.Table.from_pandas(combined_df, preserve_index=False)
        pq.write_table(table, output_file, compression='snappy')

    def generate_session_folder(self) -> str:
        """Generates the path for the current session's log files based on current datetime

        :return: Session folder path string
        :rtype: str
        """
        date_time_str = datetime.datetime.now().strftime('%d-%b-%Y-%H-%M-%S')
        return os.path.join(self.log_folder, f"log_{date_time_str}")

    def start_new_run(self):
        self._run_folder = os.path.join(self._session_folder, f"run_{self.log_ctr}")
        os.makedirs(self._run_folder, exist_ok=True)

        self.log_ctr += 1

    def log_metadata(self, run_params: RunParams):
        scenarios = []
        for scenario in run_params.scenarios:
            scenarios.append({
                "name": scenario.name,
                "fuel model": scenario.fuel_model,
                "moisture": asdict(scenario.moisture),
                "site": asdict(scenario.site),
                "canopy": asdict(scenario.canopy) if scenario.canopy is not None else None,
                "elapsed (min)": scenario.elapsed_min
            })

        metadata = {
            "description": run_params.description,
            "created": datetime.datetime.now(),
            "scenario count": len(run_params.scenarios),
            "scenarios": scenarios
        }

        safe_dict = make_json_serializable(metadata)

        os.makedirs(self._session_folder, exist_ok=True)
        metadata_path = os.path.join(self._session_folder, "metadata.json")
        with open(metadata_path, 'w') as f:
            json.dump(safe_dict, f, indent=2)

    def log_message(self, message: str):
        timestamp = datetime.datetime.now().isoformat()
        entry = f"[{timestamp}]: {message}"
        self._status_log["messages"].append(entry)

    def _require_run(self, action: str):
        if self._run_folder is None:
            raise FireBehaviorError(f"Cannot {action} before start_new_run() is called")

    def _write_status_log(self):
        status_path = os.path.join(self._run_folder, "status_log.json")
        with open(status_path, 'w') as f:
            json.dump(make_json_serializable(self._status_log), f, indent = 2)

def make_json_serializable(obj):
    if isinstance(obj, dict):
        return {k: make_json_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [make_json_serializable(item) for item in obj]
    elif isinstance(obj, tuple):
        return tuple(make_json_serializable(item) for item in obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, np.generic):
        return obj.item()
    elif isinstance(obj, datetime.datetime):
        return obj.isoformat()
    elif isinstance(obj, datetime.date):
        return obj.isoformat()
    elif hasattr(obj, '__dict__'):
        return str(obj)
    else:
        return obj
