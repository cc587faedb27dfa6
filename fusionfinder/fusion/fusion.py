from collections import namedtuple, OrderedDict
import logging

from .constants import DEFAULTS
from ..alignment import MATE1, MATE2, SPLIT_READ, SUPPLEMENTARY
from ..constants import COLUMNS, DIRECTION, STRAND
from ..util import LOG


FusionKey = namedtuple('FusionKey', [
    'gene1', 'gene2', 'contig1', 'contig2', 'breakpoint1', 'breakpoint2', 'direction1', 'direction2'
])
"""
identifies a fusion. (contig1, breakpoint1) is never greater than (contig2, breakpoint2)
"""

BreakpointSide = namedtuple('BreakpointSide', ['contig', 'breakpoint', 'genes', 'direction', 'exonic', 'anchor_start'])


class Fusion:
    """
    a candidate gene fusion with all of the chimeric alignments supporting it
    """

    def __init__(self, key):
        """
        Args:
            key (FusionKey): the genes and breakpoints of the fusion
        """
        self.gene1, self.gene2 = key.gene1, key.gene2
        self.contig1, self.contig2 = key.contig1, key.contig2
        self.breakpoint1, self.breakpoint2 = key.breakpoint1, key.breakpoint2
        self.direction1, self.direction2 = key.direction1, key.direction2
        self.exonic1 = self.exonic2 = False
        self.anchor_start1 = self.anchor_start2 = None
        self.split_reads1 = self.split_reads2 = 0
        self.discordant_mates = 0
        self.split_read1_list = []
        self.split_read2_list = []
        self.discordant_mate_list = []
        self.overlap_duplicate1 = self.overlap_duplicate2 = False
        self.filter = None
        self.predicted_strand1 = self.predicted_strand2 = None
        self.predicted_strands_ambiguous = True
        self.spliced1 = self.spliced2 = False
        self.transcript_start = None
        self.transcript_start_ambiguous = True

    @property
    def key(self):
        return FusionKey(
            self.gene1, self.gene2, self.contig1, self.contig2,
            self.breakpoint1, self.breakpoint2, self.direction1, self.direction2
        )

    def supporting_reads(self):
        """
        Returns:
            int: the number of unfiltered split reads and discordant mates
        """
        return self.split_reads1 + self.split_reads2 + self.discordant_mates

    def is_read_through(self, max_distance=DEFAULTS.max_read_through_distance):
        """
        checks if the fusion joins neighbouring genes on the same strand in the order they are
        transcribed, as when transcription runs past the end of the first gene
        """
        return (
            self.contig1 == self.contig2 and
            self.direction1 == DIRECTION.DOWNSTREAM and
            self.direction2 == DIRECTION.UPSTREAM and
            self.gene1.strand == self.gene2.strand and
            self.breakpoint2 - self.breakpoint1 <= max_distance
        )

    def expand_anchors(self, anchor_start1, anchor_start2):
        """
        extend the furthest aligned extent on each side of the fusion away from the breakpoints
        """
        self.anchor_start1 = _expand_anchor(self.anchor_start1, anchor_start1, self.direction1)
        self.anchor_start2 = _expand_anchor(self.anchor_start2, anchor_start2, self.direction2)

    def flatten(self):
        """
        Returns:
            dict: the fusion as a row of the output file
        """
        return {
            COLUMNS.gene1: str(self.gene1),
            COLUMNS.gene2: str(self.gene2),
            COLUMNS.strand1: '.' if self.predicted_strands_ambiguous else self.predicted_strand1,
            COLUMNS.strand2: '.' if self.predicted_strands_ambiguous else self.predicted_strand2,
            COLUMNS.contig1: self.contig1,
            COLUMNS.contig2: self.contig2,
            COLUMNS.breakpoint1: self.breakpoint1,
            COLUMNS.breakpoint2: self.breakpoint2,
            COLUMNS.direction1: self.direction1,
            COLUMNS.direction2: self.direction2,
            COLUMNS.exonic1: self.exonic1,
            COLUMNS.exonic2: self.exonic2,
            COLUMNS.anchor_start1: self.anchor_start1,
            COLUMNS.anchor_start2: self.anchor_start2,
            COLUMNS.split_reads1: self.split_reads1,
            COLUMNS.split_reads2: self.split_reads2,
            COLUMNS.discordant_mates: self.discordant_mates,
            COLUMNS.overlap_duplicate1: self.overlap_duplicate1,
            COLUMNS.overlap_duplicate2: self.overlap_duplicate2,
            COLUMNS.spliced1: self.spliced1,
            COLUMNS.spliced2: self.spliced2,
            COLUMNS.transcript_start: self.transcript_start,
            COLUMNS.transcript_start_ambiguous: self.transcript_start_ambiguous,
            COLUMNS.predicted_strands_ambiguous: self.predicted_strands_ambiguous,
            COLUMNS.filter: self.filter,
        }

    def __repr__(self):
        return 'Fusion({}:{}:{} {}:{}:{})'.format(
            self.gene1, self.contig1, self.breakpoint1, self.gene2, self.contig2, self.breakpoint2)


def _expand_anchor(current, anchor_start, direction):
    # downstream breakpoints are anchored to their left and upstream breakpoints to their right
    if current is None:
        return anchor_start
    if direction == DIRECTION.DOWNSTREAM:
        return min(current, anchor_start)
    return max(current, anchor_start)


def split_read_sides(chimeric_alignment):
    """
    the breakpoints implied by a split read. The split segment is clipped at the breakpoint on
    the side it was read from and the supplementary segment continues on the other side
    """
    split_read = chimeric_alignment[SPLIT_READ]
    supplementary = chimeric_alignment[SUPPLEMENTARY]
    mate1 = chimeric_alignment[MATE1]
    if split_read.strand == STRAND.FORWARD:
        breakpoint1, direction1 = split_read.start, DIRECTION.UPSTREAM
    else:
        breakpoint1, direction1 = split_read.end, DIRECTION.DOWNSTREAM
    if supplementary.strand == STRAND.FORWARD:
        breakpoint2, direction2 = supplementary.end, DIRECTION.DOWNSTREAM
    else:
        breakpoint2, direction2 = supplementary.start, DIRECTION.UPSTREAM
    side1 = BreakpointSide(
        split_read.contig, breakpoint1, split_read.genes, direction1, split_read.exonic, mate1.outward_end)
    side2 = BreakpointSide(
        supplementary.contig, breakpoint2, supplementary.genes, direction2, supplementary.exonic,
        supplementary.outward_end)
    return side1, side2


def discordant_mate_sides(chimeric_alignment):
    """
    the breakpoints implied by a pair of discordant mates. Each breakpoint is placed at the end
    of the mate which faces the insert
    """
    sides = []
    for mate in [chimeric_alignment[MATE1], chimeric_alignment[MATE2]]:
        direction = DIRECTION.DOWNSTREAM if mate.strand == STRAND.FORWARD else DIRECTION.UPSTREAM
        sides.append(BreakpointSide(mate.contig, mate.inward_end, mate.genes, direction, mate.exonic, mate.outward_end))
    return tuple(sides)


def aggregate_chimeric_alignments(chimeric_alignments):
    """
    merge the chimeric alignments into fusions keyed by gene pair and breakpoint pair.
    Discordant mates are only indexed by gene pair here. They are attached to the fusions
    by :func:`reconcile_discordant_mates`

    Args:
        chimeric_alignments (:class:`dict` of :class:`~fusionfinder.alignment.ChimericAlignment` or list): the evidence, in a stable order

    Returns:
        tuple: the fusions (:class:`OrderedDict` of :class:`Fusion` by :class:`FusionKey`) and the discordant mates
        (:class:`dict` of :class:`list` of :class:`~fusionfinder.alignment.ChimericAlignment` by gene pair)
    """
    if hasattr(chimeric_alignments, 'values'):
        chimeric_alignments = chimeric_alignments.values()
    fusions = OrderedDict()
    discordant_mates_by_gene_pair = {}
    malformed = 0

    for chimeric_alignment in chimeric_alignments:
        if chimeric_alignment.is_split_read:
            side1, side2 = split_read_sides(chimeric_alignment)
        elif chimeric_alignment.is_discordant_mates:
            side1, side2 = discordant_mate_sides(chimeric_alignment)
        else:
            malformed += 1
            continue

        # the breakpoint with the lower coordinate always comes first so that
        # the same fusion does not generate two entries
        swapped = False
        if (side1.contig, side1.breakpoint) > (side2.contig, side2.breakpoint):
            side1, side2 = side2, side1
            swapped = True

        for index1, gene1 in enumerate(side1.genes):
            for index2, gene2 in enumerate(side2.genes):
                key = FusionKey(
                    gene1, gene2, side1.contig, side2.contig,
                    side1.breakpoint, side2.breakpoint, side1.direction, side2.direction
                )
                is_new_fusion = key not in fusions
                if is_new_fusion:
                    fusions[key] = Fusion(key)
                fusion = fusions[key]
                fusion.exonic1 = side1.exonic
                fusion.exonic2 = side2.exonic

                if chimeric_alignment.is_split_read:
                    if fusion.supporting_reads() == 0:
                        fusion.filter = chimeric_alignment.filter
                elif chimeric_alignment.filter is None:
                    fusion.filter = None
                elif is_new_fusion or fusion.filter is not None:
                    fusion.filter = chimeric_alignment.filter

                fusion.expand_anchors(side1.anchor_start, side2.anchor_start)

                # where genes overlap at a breakpoint all but the first gene are duplicates
                fusion.overlap_duplicate1 = index1 > 0
                fusion.overlap_duplicate2 = index2 > 0

                if chimeric_alignment.is_split_read:
                    if swapped:
                        fusion.split_read2_list.append(chimeric_alignment)
                        if chimeric_alignment.filter is None:
                            fusion.split_reads2 += 1
                    else:
                        fusion.split_read1_list.append(chimeric_alignment)
                        if chimeric_alignment.filter is None:
                            fusion.split_reads1 += 1
                else:
                    discordant_mates_by_gene_pair.setdefault((gene1, gene2), []).append(chimeric_alignment)

    if malformed:
        LOG('ignored', malformed, 'chimeric alignments which were neither split reads nor discordant mates', level=logging.DEBUG)
    LOG('aggregated', len(fusions), 'fusions')
    return fusions, discordant_mates_by_gene_pair


def mate_supports_breakpoint(mate, direction, breakpoint, tolerance):
    """
    checks if a discordant mate points towards a breakpoint and does not reach past it by more than
    the tolerance. The mate may end any distance before the breakpoint, on the side of the insert

    Args:
        mate (Alignment): the mate
        direction (DIRECTION): the direction of the breakpoint
        breakpoint (int): the breakpoint position
        tolerance (int): how far the inward end of the mate may extend past the breakpoint
    """
    if direction == DIRECTION.DOWNSTREAM:
        return mate.strand == STRAND.FORWARD and mate.end - tolerance <= breakpoint
    return mate.strand == STRAND.REVERSE and mate.start + tolerance >= breakpoint


def reconcile_discordant_mates(
    fusions, discordant_mates_by_gene_pair,
    max_mate_gap=DEFAULTS.max_mate_gap,
    split_read_tolerance=DEFAULTS.split_read_tolerance,
    max_discordant_mates=DEFAULTS.max_discordant_mates
):
    """
    attach to each unfiltered fusion the discordant mates of the same gene pair which point
    towards its breakpoints

    Args:
        fusions (:class:`dict` of :class:`Fusion`): the fusions from :func:`aggregate_chimeric_alignments`
        discordant_mates_by_gene_pair (dict): discordant mates indexed by gene pair
        max_mate_gap (int): the tolerance for fusions without split reads
        split_read_tolerance (int): the tolerance for fusions with split reads
        max_discordant_mates (int): stop counting mates for a fusion once it has this many

    Returns:
        int: the number of fusions which were subsampled
    """
    subsampled_fusions = 0
    for fusion in fusions.values():
        if fusion.filter is not None:
            continue

        # without split reads the precise breakpoint is unknown and may be anywhere in the intron
        if fusion.split_reads1 + fusion.split_reads2 > 0:
            tolerance = split_read_tolerance
        else:
            tolerance = max_mate_gap

        for chimeric_alignment in discordant_mates_by_gene_pair.get((fusion.gene1, fusion.gene2), []):
            mate1 = chimeric_alignment[MATE1]
            mate2 = chimeric_alignment[MATE2]
            if (mate1.contig, mate1.inward_end) > (mate2.contig, mate2.inward_end):
                mate1, mate2 = mate2, mate1

            if not mate_supports_breakpoint(mate1, fusion.direction1, fusion.breakpoint1, tolerance):
                continue
            if not mate_supports_breakpoint(mate2, fusion.direction2, fusion.breakpoint2, tolerance):
                continue

            fusion.discordant_mate_list.append(chimeric_alignment)
            if chimeric_alignment.filter is None:
                fusion.discordant_mates += 1
            elif fusion.filter is None:
                fusion.filter = chimeric_alignment.filter

            fusion.expand_anchors(mate1.outward_end, mate2.outward_end)

            if fusion.discordant_mates >= max_discordant_mates:
                subsampled_fusions += 1
                break

    if subsampled_fusions > 0:
        LOG(
            'WARNING: {} fusions were subsampled, because they have more than {} discordant mates'.format(
                subsampled_fusions, max_discordant_mates),
            level=logging.WARNING
        )
    return subsampled_fusions
