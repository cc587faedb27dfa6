"""
module which holds all functions relating to loading reference files
"""
import json

from .genomic import Exon, Gene
from ..constants import STRAND
from ..error import AnnotationError
from ..util import DEVNULL, LOG


class Annotation:
    """
    read-only lookup of the loaded genes
    """

    def __init__(self, genes_by_chr=None):
        """
        Args:
            genes_by_chr (:class:`dict` of :class:`list` of :class:`~fusionfinder.annotate.genomic.Gene` by :class:`str`): genes keyed by chromosome name
        """
        self.genes_by_chr = {} if genes_by_chr is None else genes_by_chr
        self.genes_by_name = {}
        for genes in self.genes_by_chr.values():
            for gene in genes:
                if gene.name in self.genes_by_name:
                    raise AnnotationError('gene names must be unique', gene.name)
                self.genes_by_name[gene.name] = gene

    def __len__(self):
        return len(self.genes_by_name)

    def __contains__(self, name):
        return name in self.genes_by_name

    def get_gene(self, name):
        """
        Raises:
            KeyError: no gene by the given name has been loaded
        """
        return self.genes_by_name[name]

    def is_breakpoint_spliced(self, gene, direction, contig, breakpoint):
        """
        checks if a breakpoint coincides with an intron boundary of the given gene

        Args:
            gene (Gene): the gene the breakpoint is assigned to
            direction (DIRECTION): the side of the breakpoint the fused partner lies on
            contig (str): the contig of the breakpoint
            breakpoint (int): the genomic position of the breakpoint

        Returns:
            bool: True if the breakpoint is at a splice site of the gene
        """
        if gene.chr != contig:
            return False
        return breakpoint in gene.splice_sites(direction)


def load_annotations(*filepaths, warn=DEVNULL):
    """
    loads gene models from an input JSON file

    Args:
        filepaths (str): paths to the input files
        warn (function): function to print warnings to

    Returns:
        Annotation: the genes of all the input files
    """
    total_annotations = {}

    for filename in filepaths:
        LOG('loading:', filename)
        with open(filename) as fh:
            data = json.load(fh)

        current_annotations = parse_annotations_json(data, warn=warn)

        for chrom in current_annotations:
            for gene in current_annotations[chrom]:
                total_annotations.setdefault(chrom, []).append(gene)
    annotation = Annotation(total_annotations)
    LOG('loaded', len(annotation), 'genes')
    return annotation


def parse_annotations_json(data, warn=DEVNULL):
    """
    parses a json of annotation information into annotation objects

    Raises:
        AnnotationError: a gene is missing a required field or has an unexpected strand
    """
    genes_by_chr = {}
    try:
        gene_list = data['genes']
    except (KeyError, TypeError):
        raise AnnotationError('input has unexpected form. expected an object with a genes list')
    for gene_dict in gene_list:
        if str(gene_dict.get('strand')) in ['1', '+']:
            strand = STRAND.FORWARD
        elif str(gene_dict.get('strand')) in ['-1', '-']:
            strand = STRAND.REVERSE
        else:
            raise AnnotationError('input has unexpected form. strand must be 1 or -1 but found', gene_dict.get('strand'))

        try:
            gene = Gene(
                chr=gene_dict['chr'],
                start=gene_dict['start'],
                end=gene_dict['end'],
                name=gene_dict['name'],
                aliases=gene_dict.get('aliases', []),
                strand=strand
            )
        except KeyError as err:
            raise AnnotationError('gene is missing a required field', err)

        for transcript in gene_dict.get('transcripts', []):
            exons = [Exon(ex['start'], ex['end'], name=ex.get('name')) for ex in transcript.get('exons', [])]
            if not exons:
                warn('ignoring transcript without exons:', transcript.get('name'))
                continue
            gene.add_transcript(exons, name=transcript.get('name'))
        genes_by_chr.setdefault(gene.chr, []).append(gene)
    return genes_by_chr
