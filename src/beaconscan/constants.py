# Multiplier that folds a gap point into a single "tuning frequency" number.
TUNING_MULTIPLIER = 4_000_000

DEFAULT_TARGET_ROW = 2_000_000
DEFAULT_DOMAIN_LIMIT = 4_000_000

# Glyphs used by the text map renderer.
GLYPH_SENSOR = "S"
GLYPH_BEACON = "B"
GLYPH_COVERED = "#"
GLYPH_FREE = "."
