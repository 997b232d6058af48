"""
Transforms sub-package for era5-merge.

Composable steps that turn the wide table into the master table.
Each step takes a DataFrame and returns a new one.

Design: Pipeline Pattern
- pipeline.py orchestrates the sequence of transforms.
- Individual transforms live in separate modules for testability:
  - dates.py: Split the ``DD-MM-YYYY`` date into day/month/year.
  - units.py: Linear unit conversions (K -> degC, m/day -> mm/day).
  - categories.py: Integer code -> label recoding (soil type).
  - reorder.py: Fixed final column order.
"""
