from .errors import AmbiguousGapError, DomainGuaranteeError, GapSearchError, NoGapFoundError
from .intervals import clip, coverage_at_row, covered_length, interval_at_row, merge, row_gaps, row_intervals
from .analyzer import count_uncertain_positions, find_uncovered_point, gap_in_row, row_counts, tuning_frequency
from .grid import CoverageMap, CoverageSummary, row_table
