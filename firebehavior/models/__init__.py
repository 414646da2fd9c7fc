"""Fire behavior models.

Modules:
    - fuel_bed: Fuel particles, fuel beds and Rothermel fuel bed intermediates.
    - moisture: Moisture damping, live extinction moisture and reaction intensity.
    - surface_fire: Rothermel (1972) surface spread with elliptical growth.
    - crown_fire: Crown fire classification (Rothermel 1991, Van Wagner 1977,
      Scott & Reinhardt 2001).
    - chaparral: Rothermel & Philpot (1973) chaparral fuel populator.
    - fuel_models: Anderson 13 fuel model catalog.
    - spotting: Albini maximum spotting distances.
    - tree_mortality: FOFEM 6 bark thickness, mortality and crown scorch.
"""
