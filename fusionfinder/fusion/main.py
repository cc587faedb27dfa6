import os
import time

from .constants import DEFAULTS
from .fusion import aggregate_chimeric_alignments, reconcile_discordant_mates
from .predict import predict_fusion_strands, predict_spliced_breakpoints, predict_transcript_start
from ..alignment import read_chimeric_alignments
from ..annotate.file_io import load_annotations
from ..constants import FILTER
from ..util import LOG, generate_complete_stamp, mkdirp, output_tabbed_file


def find_fusions(
    chimeric_alignments, annotation,
    max_mate_gap=DEFAULTS.max_mate_gap,
    split_read_tolerance=DEFAULTS.split_read_tolerance,
    max_discordant_mates=DEFAULTS.max_discordant_mates,
    max_read_through_distance=DEFAULTS.max_read_through_distance,
    hairpin_filter=FILTER.HAIRPIN
):
    """
    build the fusions supported by a set of chimeric alignments and predict their orientation

    Args:
        chimeric_alignments (:class:`dict` of :class:`~fusionfinder.alignment.ChimericAlignment` or list): the evidence, in a stable order
        annotation (Annotation): the gene annotations used to check for splice sites
        max_mate_gap (int): see :func:`~fusionfinder.fusion.fusion.reconcile_discordant_mates`
        split_read_tolerance (int): see :func:`~fusionfinder.fusion.fusion.reconcile_discordant_mates`
        max_discordant_mates (int): see :func:`~fusionfinder.fusion.fusion.reconcile_discordant_mates`
        max_read_through_distance (int): see :func:`~fusionfinder.fusion.predict.predict_transcript_start`
        hairpin_filter (str): discordant mates with this filter do not vote on the strand

    Returns:
        tuple: the fusions (:class:`OrderedDict` of :class:`~fusionfinder.fusion.fusion.Fusion` by
        :class:`~fusionfinder.fusion.fusion.FusionKey`) and the number of fusions which were not filtered
    """
    fusions, discordant_mates_by_gene_pair = aggregate_chimeric_alignments(chimeric_alignments)

    reconcile_discordant_mates(
        fusions, discordant_mates_by_gene_pair,
        max_mate_gap=max_mate_gap,
        split_read_tolerance=split_read_tolerance,
        max_discordant_mates=max_discordant_mates
    )

    remaining = 0
    for fusion in fusions.values():
        predict_fusion_strands(fusion, hairpin_filter=hairpin_filter)
        # must come after strand prediction
        predict_spliced_breakpoints(fusion, annotation)
        # must come after splice-site prediction
        predict_transcript_start(fusion, max_read_through_distance=max_read_through_distance)

        if fusion.filter is None:
            remaining += 1
    LOG(remaining, 'of', len(fusions), 'fusions passed the filters')
    return fusions, remaining


def main(
    inputs, output, annotations,
    max_mate_gap=DEFAULTS.max_mate_gap,
    split_read_tolerance=DEFAULTS.split_read_tolerance,
    max_discordant_mates=DEFAULTS.max_discordant_mates,
    max_read_through_distance=DEFAULTS.max_read_through_distance,
    start_time=int(time.time()),
    **kwargs
):
    """
    Args:
        inputs (:class:`List` of :class:`str`): list of chimeric alignment files to read
        output (str): path to the output directory
        annotations (str): path to the gene annotations JSON file
        max_mate_gap (int): see :func:`find_fusions`
        split_read_tolerance (int): see :func:`find_fusions`
        max_discordant_mates (int): see :func:`find_fusions`
        max_read_through_distance (int): see :func:`find_fusions`

    Returns:
        str: path to the fusions output file
    """
    mkdirp(output)
    annotation = load_annotations(annotations, warn=LOG)
    chimeric_alignments = read_chimeric_alignments(*inputs, annotation=annotation)

    LOG('finding fusions', time_stamp=True)
    fusions, remaining = find_fusions(
        chimeric_alignments, annotation,
        max_mate_gap=max_mate_gap,
        split_read_tolerance=split_read_tolerance,
        max_discordant_mates=max_discordant_mates,
        max_read_through_distance=max_read_through_distance
    )

    fusions_output = os.path.join(output, 'fusions.tab')
    output_tabbed_file(fusions.values(), fusions_output)
    generate_complete_stamp(output, LOG, start_time=start_time)
    return fusions_output
