"""
gene and exon annotations used to decide the orientation of fusion partners

Algorithm Overview
----------------------

- read the gene models from a JSON file (see :func:`~fusionfinder.annotate.file_io.load_annotations`)
- collect the intron boundaries of every transcript of a gene
- a breakpoint is spliced when it falls exactly on one of these boundaries on the side facing the fused partner
"""
from .file_io import Annotation, load_annotations, parse_annotations_json
from .genomic import Exon, Gene, Transcript
