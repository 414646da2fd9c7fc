"""Shared utilities for the firebehavior package.

Modules:
    - fire_util: Core constants and enumerations.
    - geometry: Fire ellipse, intensity and flame length relations.
    - unit_conversions: Imperial-metric unit conversion functions.
    - data_classes: Dataclasses for run configuration.
    - logger: Run logging with Parquet output.
    - logger_schemas: Data schemas for logged entries.
    - parquet_writer: Parquet file writing utilities.
"""
