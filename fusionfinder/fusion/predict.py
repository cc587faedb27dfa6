"""
predict the orientation of the fused transcript. The functions here must be called in order
for each fusion (strands, then splice sites, then transcript start) because each one reads
what the previous one wrote to the fusion
"""
from .constants import DEFAULTS
from ..alignment import MATE1, MATE2, SPLIT_READ, SUPPLEMENTARY
from ..constants import DIRECTION, FILTER, STRAND, TRANSCRIPT_START, complement_strand_if


def resolve_breakpoint1_mate(fusion, chimeric_alignment):
    """
    find out which of a pair of discordant mates supports the first breakpoint of a fusion

    Returns:
        Alignment: the mate supporting breakpoint1 or None if this cannot be decided
    """
    mate1 = chimeric_alignment[MATE1]
    mate2 = chimeric_alignment[MATE2]
    if mate1.contig != fusion.contig1 or \
            (mate1.strand == STRAND.FORWARD) != (fusion.direction1 == DIRECTION.DOWNSTREAM):
        # mate1 is on the other contig or points away from breakpoint1
        return mate2
    if mate1.strand == mate2.strand:
        # same contig and same direction. pick the assignment where the mates are closest to the breakpoints
        if fusion.direction1 == DIRECTION.DOWNSTREAM:
            mate1_end, mate2_end = mate1.end, mate2.end
        else:
            mate1_end, mate2_end = mate1.start, mate2.start
        distance1 = abs(fusion.breakpoint1 - mate1_end) + abs(fusion.breakpoint2 - mate2_end)
        distance2 = abs(fusion.breakpoint2 - mate1_end) + abs(fusion.breakpoint1 - mate2_end)
        if distance1 == distance2:
            return None
        elif distance2 < distance1:
            return mate2
    return mate1


def count_strand1_votes(fusion, hairpin_filter=FILTER.HAIRPIN):
    """
    count the reads which imply that the transcript is on the forward or reverse strand at breakpoint1

    Returns:
        tuple of int: the forward and reverse votes
    """
    voting_alignments = []

    for chimeric_alignment in fusion.split_read1_list:
        if chimeric_alignment.filter is None and not chimeric_alignment[SPLIT_READ].predicted_strand_ambiguous:
            voting_alignments.append(chimeric_alignment[SPLIT_READ])

    # strand2 follows from strand1 so the supplementary segments vote for strand1 as well
    for chimeric_alignment in fusion.split_read2_list:
        if chimeric_alignment.filter is None and not chimeric_alignment[SUPPLEMENTARY].predicted_strand_ambiguous:
            voting_alignments.append(chimeric_alignment[SUPPLEMENTARY])

    for chimeric_alignment in fusion.discordant_mate_list:
        # the read strand is taken from the first mate, before deciding which mate supports breakpoint1
        if chimeric_alignment.filter == hairpin_filter or chimeric_alignment[MATE1].predicted_strand_ambiguous:
            continue
        mate = resolve_breakpoint1_mate(fusion, chimeric_alignment)
        if mate is not None:
            voting_alignments.append(mate)

    forward = len([a for a in voting_alignments if a.predicted_strand == STRAND.FORWARD])
    return forward, len(voting_alignments) - forward


def predict_fusion_strands(fusion, hairpin_filter=FILTER.HAIRPIN):
    """
    predict the transcribed strand at both breakpoints by majority vote of the supporting reads
    """
    forward, reverse = count_strand1_votes(fusion, hairpin_filter=hairpin_filter)

    if forward == reverse:
        fusion.predicted_strands_ambiguous = True
    else:
        fusion.predicted_strands_ambiguous = False
        fusion.predicted_strand1 = STRAND.FORWARD if forward > reverse else STRAND.REVERSE
        fusion.predicted_strand2 = complement_strand_if(fusion.predicted_strand1, fusion.direction1 == fusion.direction2)
    return fusion


def predict_spliced_breakpoints(fusion, annotation):
    """
    check if the breakpoints are at splice sites of genes on the predicted strand.
    Fusions supported only by discordant mates have no precise breakpoint and cannot be spliced

    Args:
        fusion (Fusion): the fusion with its strands already predicted
        annotation (Annotation): provides the splice sites
    """
    if not fusion.split_read1_list and not fusion.split_read2_list or fusion.predicted_strands_ambiguous:
        fusion.spliced1 = False
        fusion.spliced2 = False
    else:
        fusion.spliced1 = bool(
            fusion.exonic1 and
            fusion.gene1.strand == fusion.predicted_strand1 and
            annotation.is_breakpoint_spliced(fusion.gene1, fusion.direction1, fusion.contig1, fusion.breakpoint1)
        )
        fusion.spliced2 = bool(
            fusion.exonic2 and
            fusion.gene2.strand == fusion.predicted_strand2 and
            annotation.is_breakpoint_spliced(fusion.gene2, fusion.direction2, fusion.contig2, fusion.breakpoint2)
        )
    return fusion


def gene_drives_transcription(gene, direction):
    """
    checks if a gene keeps its 5' end at the breakpoint (its promoter is retained)
    """
    return (
        gene.strand == STRAND.FORWARD and direction == DIRECTION.DOWNSTREAM or
        gene.strand == STRAND.REVERSE and direction == DIRECTION.UPSTREAM
    )


def _predict_from_intronic_partner(fusion, gene, direction, gene_transcript_start, max_read_through_distance):
    # the other breakpoint is intronic/intergenic so its strand is unclear and this gene decides
    if gene_drives_transcription(gene, direction):
        return gene_transcript_start
    elif fusion.split_reads1 + fusion.split_reads2 == 0 and \
            fusion.is_read_through(max_read_through_distance):
        # without split reads the precise breakpoint is unknown and could be spliced
        return TRANSCRIPT_START.GENE1
    return None


def predict_transcript_start(fusion, max_read_through_distance=DEFAULTS.max_read_through_distance):
    """
    try to determine which gene makes the 5' end of the transcript by looking at which promoter
    likely drives transcription. Falls back to the location of the breakpoints in exons or introns
    when the strands could not be predicted

    A fusion where the 5' gene cannot be determined is marked ambiguous and gene1 is reported
    as the transcript start, so that the partners are always output in a stable order
    """
    transcript_start = None

    if fusion.spliced1 or \
            not fusion.predicted_strands_ambiguous and fusion.predicted_strand1 == fusion.gene1.strand:
        if gene_drives_transcription(fusion.gene1, fusion.direction1):
            transcript_start = TRANSCRIPT_START.GENE1
        else:
            transcript_start = TRANSCRIPT_START.GENE2

    elif fusion.spliced2 or \
            not fusion.predicted_strands_ambiguous and fusion.predicted_strand2 == fusion.gene2.strand:
        if gene_drives_transcription(fusion.gene2, fusion.direction2):
            transcript_start = TRANSCRIPT_START.GENE2
        else:
            transcript_start = TRANSCRIPT_START.GENE1

    elif not fusion.exonic1 and not fusion.exonic2 or not fusion.predicted_strands_ambiguous:
        # both breakpoints are intronic or the predicted strands contradict both genes
        pass

    elif not fusion.exonic1 and fusion.exonic2:
        transcript_start = _predict_from_intronic_partner(
            fusion, fusion.gene2, fusion.direction2, TRANSCRIPT_START.GENE2, max_read_through_distance)

    elif fusion.exonic1 and not fusion.exonic2:
        transcript_start = _predict_from_intronic_partner(
            fusion, fusion.gene1, fusion.direction1, TRANSCRIPT_START.GENE1, max_read_through_distance)

    elif gene_drives_transcription(fusion.gene1, fusion.direction1):
        transcript_start = TRANSCRIPT_START.GENE1

    elif gene_drives_transcription(fusion.gene2, fusion.direction2):
        transcript_start = TRANSCRIPT_START.GENE2

    if transcript_start is None:
        fusion.transcript_start_ambiguous = True
        fusion.transcript_start = TRANSCRIPT_START.GENE1
        return fusion

    fusion.transcript_start_ambiguous = False
    fusion.transcript_start = transcript_start

    # predict strands from gene orientations, if they could not be predicted from the reads
    if fusion.predicted_strands_ambiguous:
        fusion.predicted_strands_ambiguous = False
        same_direction = fusion.direction1 == fusion.direction2
        if transcript_start == TRANSCRIPT_START.GENE1:
            fusion.predicted_strand1 = fusion.gene1.strand
            fusion.predicted_strand2 = complement_strand_if(fusion.predicted_strand1, same_direction)
        else:
            fusion.predicted_strand2 = fusion.gene2.strand
            fusion.predicted_strand1 = complement_strand_if(fusion.predicted_strand2, same_direction)
    return fusion
