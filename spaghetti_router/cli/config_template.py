"""
Configuration template for spaghetti-router
"""

CONFIG_TEMPLATE = """# Path Router Configuration
# ============================================================================
# Every value below is the built-in default; delete what you do not change.
# String values may reference environment variables: ${VAR} or ${VAR:-default}

# Grid rasterization
# ----------------------------------------------------------------------------
grid:
  cell_size: 20        # World units per grid cell (smaller = finer, slower)
  padding: 40          # Room around start, end and obstacles for detours
  safety_margin: 6     # Clearance kept from every blocking rectangle

# A* search
# ----------------------------------------------------------------------------
search:
  max_iterations: 20000      # Expansion budget; exhausting it means "no route"
  proximity_weight: 0        # > 0 makes routes keep away from clutter
  proximity_radius_cells: 3  # How far (in cells) clutter is felt

# Simplification
# ----------------------------------------------------------------------------
simplify:
  freehand_tolerance: 8   # Minimum spacing kept on hand-drawn paths
  route_tolerance: 3      # Minimum spacing kept on routed paths
  line_of_sight: true     # Remove grid zig-zags where the straight line is free

# Smoothing
# ----------------------------------------------------------------------------
smoothing:
  mode: rounded           # Options: none, rounded, catmull_rom
  corner_radius: 12       # rounded: how far corners are cut back
  spline_substeps: 8      # catmull_rom: samples per span
  min_sample_distance: 0.5

# Hit testing
# ----------------------------------------------------------------------------
hit_test:
  path_threshold: 5       # Click distance counted as a path hit at zoom 1
"""
