from ..constants import WeakFusionNamespace


DEFAULTS = WeakFusionNamespace()
"""
- max_mate_gap
- split_read_tolerance
- max_discordant_mates
- max_read_through_distance
"""
DEFAULTS.add(
    'max_mate_gap',
    10000,
    defn='the maximum distance between a discordant mate and the breakpoint of a fusion without split reads for '
    'the mate to be counted as support. Should be about the size of the largest expected intron',
)
DEFAULTS.add(
    'split_read_tolerance',
    2,
    defn='the maximum distance between a discordant mate and a breakpoint which is supported by split reads',
)
DEFAULTS.add(
    'max_discordant_mates',
    1000,
    defn='fusions with this many discordant mates are subsampled. Further mates are not counted',
)
DEFAULTS.add(
    'max_read_through_distance',
    400000,
    defn='the maximum distance between the breakpoints of two genes on the same strand for the fusion to be '
    'considered a read-through',
)
