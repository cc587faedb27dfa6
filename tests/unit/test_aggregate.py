import logging

from fusionfinder.alignment import ChimericAlignment
from fusionfinder.constants import DIRECTION, FILTER, STRAND
from fusionfinder.fusion.fusion import (
    FusionKey,
    aggregate_chimeric_alignments,
    discordant_mate_sides,
    split_read_sides,
)

from .mock import find_fusion, mock_alignment, mock_discordant_mates, mock_gene, mock_split_read

GENE_A = mock_gene('A', chr='1', start=1000, end=5000)
GENE_A2 = mock_gene('A2', chr='1', start=2000, end=4000)
GENE_B = mock_gene('B', chr='2', start=8000, end=20000)


def split_read(mate1_start=2800, supplementary_end=10050, genes1=(GENE_A,), filter=None):
    """
    split read joining chr1:3000 (downstream) to chr2:10000 (upstream)
    """
    return mock_split_read(
        mock_alignment('1', mate1_start, 2900, STRAND.FORWARD, genes=genes1),
        mock_alignment('1', 2950, 3000, STRAND.REVERSE, genes=genes1, predicted_strand=STRAND.FORWARD, exonic=True),
        mock_alignment('2', 10000, supplementary_end, STRAND.REVERSE, genes=[GENE_B], exonic=True),
        filter=filter
    )


def swapped_split_read(filter=None):
    """
    the same breakpoint pair read from the other side
    """
    return mock_split_read(
        mock_alignment('2', 10100, 10200, STRAND.REVERSE, genes=[GENE_B]),
        mock_alignment('2', 10000, 10050, STRAND.FORWARD, genes=[GENE_B], exonic=True),
        mock_alignment('1', 2950, 3000, STRAND.FORWARD, genes=[GENE_A], exonic=True),
        filter=filter
    )


def discordant_mates(end1=3000, start2=10000, filter=None):
    return mock_discordant_mates(
        mock_alignment('1', end1 - 100, end1, STRAND.FORWARD, genes=[GENE_A]),
        mock_alignment('2', start2, start2 + 100, STRAND.REVERSE, genes=[GENE_B]),
        filter=filter
    )


class TestSplitReadSides:
    def test_reverse_split_segment(self):
        side1, side2 = split_read_sides(split_read())
        assert side1.contig == '1'
        assert side1.breakpoint == 3000
        assert side1.direction == DIRECTION.DOWNSTREAM
        assert side1.anchor_start == 2800
        assert side1.exonic
        assert side2.breakpoint == 10000
        assert side2.direction == DIRECTION.UPSTREAM
        assert side2.anchor_start == 10050

    def test_forward_split_segment(self):
        side1, side2 = split_read_sides(swapped_split_read())
        assert side1.contig == '2'
        assert side1.breakpoint == 10000
        assert side1.direction == DIRECTION.UPSTREAM
        assert side1.anchor_start == 10200
        assert side2.breakpoint == 3000
        assert side2.direction == DIRECTION.DOWNSTREAM
        assert side2.anchor_start == 2950


class TestDiscordantMateSides:
    def test_inward_ends(self):
        side1, side2 = discordant_mate_sides(discordant_mates())
        assert (side1.breakpoint, side1.direction, side1.anchor_start) == (3000, DIRECTION.DOWNSTREAM, 2900)
        assert (side2.breakpoint, side2.direction, side2.anchor_start) == (10000, DIRECTION.UPSTREAM, 10100)


class TestAggregateChimericAlignments:
    def test_canonical_ordering(self):
        fusions, _ = aggregate_chimeric_alignments([split_read(), swapped_split_read()])
        assert len(fusions) == 1
        fusion = list(fusions.values())[0]
        assert fusion.key == FusionKey(GENE_A, GENE_B, '1', '2', 3000, 10000, DIRECTION.DOWNSTREAM, DIRECTION.UPSTREAM)
        assert fusion.split_reads1 == 1
        assert fusion.split_reads2 == 1
        assert len(fusion.split_read1_list) == 1
        assert len(fusion.split_read2_list) == 1
        assert fusion.exonic1
        assert fusion.exonic2

    def test_accepts_dict(self):
        fusions, _ = aggregate_chimeric_alignments({'read1': split_read(), 'read2': swapped_split_read()})
        assert len(fusions) == 1

    def test_overlap_duplicate(self):
        fusions, _ = aggregate_chimeric_alignments([split_read(genes1=[GENE_A, GENE_A2])])
        assert len(fusions) == 2
        primary = find_fusion(fusions, 3000, 10000, gene1=GENE_A)
        duplicate = find_fusion(fusions, 3000, 10000, gene1=GENE_A2)
        assert not primary.overlap_duplicate1
        assert duplicate.overlap_duplicate1
        assert not primary.overlap_duplicate2
        assert not duplicate.overlap_duplicate2

    def test_no_genes(self):
        fusions, _ = aggregate_chimeric_alignments([split_read(genes1=[])])
        assert not fusions

    def test_anchors_expand(self):
        fusions, _ = aggregate_chimeric_alignments([
            split_read(mate1_start=2800, supplementary_end=10050),
            split_read(mate1_start=2700, supplementary_end=10040),
            split_read(mate1_start=2750, supplementary_end=10080),
        ])
        fusion = find_fusion(fusions, 3000, 10000)
        assert fusion.anchor_start1 == 2700
        assert fusion.anchor_start2 == 10080

    def test_malformed_group_ignored(self, caplog):
        caplog.set_level(logging.DEBUG)
        malformed = ChimericAlignment([mock_alignment('1', 1, 100, STRAND.FORWARD, genes=[GENE_A])])
        fusions, discordant = aggregate_chimeric_alignments([malformed, split_read()])
        assert len(fusions) == 1
        assert not discordant
        assert 'ignored 1 chimeric alignments' in caplog.text

    def test_discordant_mates_indexed_by_gene_pair(self):
        mates = discordant_mates(end1=2990, start2=10010)
        fusions, discordant = aggregate_chimeric_alignments([mates])
        assert discordant == {(GENE_A, GENE_B): [mates]}
        fusion = find_fusion(fusions, 2990, 10010)
        assert fusion.discordant_mates == 0
        assert fusion.discordant_mate_list == []
        assert fusion.anchor_start1 == 2890
        assert fusion.anchor_start2 == 10110

    def test_filtered_split_reads_are_listed_but_not_counted(self):
        fusions, _ = aggregate_chimeric_alignments([split_read(filter=FILTER.DUPLICATES), split_read()])
        fusion = find_fusion(fusions, 3000, 10000)
        assert fusion.split_reads1 == 1
        assert len(fusion.split_read1_list) == 2


class TestFilterPropagation:
    def test_first_split_read_sets_filter(self):
        fusions, _ = aggregate_chimeric_alignments([split_read(filter=FILTER.DUPLICATES)])
        assert find_fusion(fusions, 3000, 10000).filter == FILTER.DUPLICATES

    def test_split_read_filter_replaced_until_supported(self):
        fusions, _ = aggregate_chimeric_alignments([
            split_read(filter=FILTER.DUPLICATES),
            split_read(),
            split_read(filter=FILTER.MISMAPPERS),
        ])
        fusion = find_fusion(fusions, 3000, 10000)
        assert fusion.filter is None
        assert fusion.split_reads1 == 1

    def test_filtered_discordant_mates_create_filtered_fusion(self):
        fusions, _ = aggregate_chimeric_alignments([discordant_mates(filter=FILTER.HAIRPIN)])
        assert find_fusion(fusions, 3000, 10000).filter == FILTER.HAIRPIN

    def test_unfiltered_discordant_mates_are_sticky(self):
        fusions, _ = aggregate_chimeric_alignments([
            discordant_mates(),
            discordant_mates(filter=FILTER.HAIRPIN),
        ])
        assert find_fusion(fusions, 3000, 10000).filter is None

    def test_unfiltered_discordant_mates_clear_filter(self):
        fusions, _ = aggregate_chimeric_alignments([
            discordant_mates(filter=FILTER.HAIRPIN),
            discordant_mates(),
        ])
        assert find_fusion(fusions, 3000, 10000).filter is None

    def test_filtered_discordant_mates_overwrite_filtered_fusion(self):
        fusions, _ = aggregate_chimeric_alignments([
            discordant_mates(filter=FILTER.HAIRPIN),
            discordant_mates(filter=FILTER.DUPLICATES),
        ])
        assert find_fusion(fusions, 3000, 10000).filter == FILTER.DUPLICATES
