"""
Widget Layout Service

Per-user dashboard templates: responsive widget grids at four breakpoints,
seeded from a catalog of base templates.
"""
