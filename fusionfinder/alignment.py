"""
chimeric alignments are the evidence the fusions are built from. Each is either a pair of
discordant mates or a split read (the split segment, its supplementary segment and the
mate the split read belongs to)
"""
from collections import OrderedDict

import pandas as pd

from .constants import COLUMNS, ROLE, STRAND, cast_boolean
from .error import InvalidChimericAlignment
from .util import LOG, bash_expands

# positions of the alignments within a chimeric alignment
MATE1 = 0
MATE2 = 1
SPLIT_READ = 1
SUPPLEMENTARY = 2


class Alignment:
    """
    one mapped segment of a read
    """

    def __init__(
        self, contig, start, end, strand,
        predicted_strand=None,
        predicted_strand_ambiguous=True,
        genes=None,
        exonic=False,
        filter=None
    ):
        """
        Args:
            contig (str): the reference sequence the segment is aligned to
            start (int): the first aligned genomic position
            end (int): the last aligned genomic position
            strand (STRAND): the strand the segment is aligned to
            predicted_strand (STRAND): the strand the read is predicted to be transcribed from
            predicted_strand_ambiguous (bool): True if the read strand could not be predicted
            genes (list of Gene): the genes the segment overlaps, in order of priority
            exonic (bool): True if the segment overlaps an exon
            filter (str): the filter which removed this alignment, None if it passed
        """
        self.contig = contig
        self.start = int(start)
        self.end = int(end)
        self.strand = STRAND.enforce(strand)
        self.predicted_strand = self.strand if predicted_strand is None else STRAND.enforce(predicted_strand)
        self.predicted_strand_ambiguous = predicted_strand_ambiguous
        self.genes = [] if genes is None else list(genes)
        self.exonic = exonic
        self.filter = filter

    @property
    def inward_end(self):
        """int: the end of the segment which faces the insert (the end of a forward read, the start of a reverse read)"""
        return self.end if self.strand == STRAND.FORWARD else self.start

    @property
    def outward_end(self):
        """int: the end of the segment which faces away from the insert"""
        return self.start if self.strand == STRAND.FORWARD else self.end

    def __repr__(self):
        return 'Alignment({}:{}-{}{})'.format(self.contig, self.start, self.end, self.strand)


class ChimericAlignment:
    """
    a group of 2 (discordant mates) or 3 (split read) alignments belonging to the same read pair
    """

    def __init__(self, alignments, filter=None, name=None):
        self.alignments = list(alignments)
        self.filter = filter
        self.name = name

    def __getitem__(self, index):
        return self.alignments[index]

    def __len__(self):
        return len(self.alignments)

    def __iter__(self):
        return iter(self.alignments)

    @property
    def is_split_read(self):
        return len(self.alignments) == 3

    @property
    def is_discordant_mates(self):
        return len(self.alignments) == 2

    def __repr__(self):
        return 'ChimericAlignment({}, {}, filter={})'.format(self.name, self.alignments, self.filter)


def _nullable(value):
    if value is None or pd.isnull(value) or str(value).lower() in ['', 'none', 'null', '.']:
        return None
    return value


def _build_chimeric_alignment(name, rows, annotation):
    alignments_by_role = {}
    group_filter = None
    for row in rows:
        role = row[COLUMNS.role]
        try:
            ROLE.enforce(role)
        except KeyError:
            raise InvalidChimericAlignment('unexpected alignment role', name, role)
        if role in alignments_by_role:
            raise InvalidChimericAlignment('alignment role given more than once', name, role)
        genes = []
        for gene_name in (_nullable(row.get(COLUMNS.genes)) or '').split(';'):
            if not gene_name:
                continue
            try:
                gene = annotation.get_gene(gene_name)
            except KeyError:
                raise InvalidChimericAlignment('alignment overlaps a gene which is not annotated', name, gene_name)
            if gene not in genes:
                genes.append(gene)
        try:
            predicted_strand = _nullable(row.get(COLUMNS.predicted_strand))
            alignments_by_role[role] = Alignment(
                row[COLUMNS.contig],
                row[COLUMNS.start],
                row[COLUMNS.end],
                row[COLUMNS.strand],
                predicted_strand=predicted_strand,
                predicted_strand_ambiguous=(
                    predicted_strand is None or
                    cast_boolean(_nullable(row.get(COLUMNS.predicted_strand_ambiguous)) or False)
                ),
                genes=genes,
                exonic=cast_boolean(_nullable(row.get(COLUMNS.exonic)) or False),
                filter=_nullable(row.get(COLUMNS.alignment_filter))
            )
        except (KeyError, TypeError, ValueError) as err:
            raise InvalidChimericAlignment('could not parse alignment', name, role, err)
        group_filter = group_filter or _nullable(row.get(COLUMNS.filter))

    roles = set(alignments_by_role)
    if roles == {ROLE.MATE1, ROLE.MATE2}:
        alignments = [alignments_by_role[ROLE.MATE1], alignments_by_role[ROLE.MATE2]]
    elif roles == {ROLE.MATE1, ROLE.SPLIT_READ, ROLE.SUPPLEMENTARY}:
        alignments = [
            alignments_by_role[ROLE.MATE1],
            alignments_by_role[ROLE.SPLIT_READ],
            alignments_by_role[ROLE.SUPPLEMENTARY],
        ]
    else:
        raise InvalidChimericAlignment('chimeric alignment must be a pair of discordant mates or a split read', name, sorted(roles))
    return ChimericAlignment(alignments, filter=group_filter, name=name)


def read_chimeric_alignments(*filepaths, annotation):
    """
    reads chimeric alignments from tab-delimited files with one row per alignment. Rows are
    grouped by read name in order of first appearance

    Args:
        filepaths (str): paths (or bash-style expressions) of the input files
        annotation (Annotation): used to resolve the gene names of each alignment

    Returns:
        :class:`OrderedDict` of :class:`ChimericAlignment` by :class:`str`: chimeric alignments keyed by read name

    Raises:
        InvalidChimericAlignment: a read has an unexpected combination of alignments
    """
    rows_by_name = OrderedDict()
    for filename in bash_expands(*filepaths):
        LOG('loading:', filename)
        try:
            df = pd.read_csv(filename, dtype=str, sep='\t', comment='#', keep_default_na=False)
        except pd.errors.EmptyDataError:
            continue
        for col in [COLUMNS.name, COLUMNS.role, COLUMNS.contig, COLUMNS.start, COLUMNS.end, COLUMNS.strand]:
            if col not in df:
                raise KeyError('missing required column: {}'.format(col))
        for row in df.to_dict('records'):
            rows_by_name.setdefault(row[COLUMNS.name], []).append(row)

    chimeric_alignments = OrderedDict()
    for name, rows in rows_by_name.items():
        chimeric_alignments[name] = _build_chimeric_alignment(name, rows, annotation)
    LOG('loaded', len(chimeric_alignments), 'chimeric alignments')
    return chimeric_alignments
