"""
Sub-package Documentation
==========================

The fusion sub-package is responsible for turning chimeric alignments into candidate gene fusions.

Types of Output Files
----------------------

+--------------------------------+------------------+----------------------------------------------------------------------+
| expected name/suffix           | file type/format | content                                                              |
+================================+==================+======================================================================+
| ``fusions.tab``                | text/tabbed      | one row per candidate fusion (and per gene pair at overlapping genes)|
+--------------------------------+------------------+----------------------------------------------------------------------+

Algorithm Overview
--------------------

- Aggregate split reads and discordant mates into fusions keyed by gene pair and breakpoint pair

    - The breakpoint with the lower coordinate is always put first
    - A read overlapping several genes supports one fusion per gene combination

- Attach discordant mates to every fusion of the same gene pair whose breakpoints they point towards
- Predict the strands of the fusion partners by majority vote of the supporting reads
- Check if the breakpoints are at splice sites
- Predict which gene makes the 5' end of the fused transcript

"""
from .fusion import Fusion, FusionKey, aggregate_chimeric_alignments, reconcile_discordant_mates
from .main import find_fusions
