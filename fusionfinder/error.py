class InvalidChimericAlignment(Exception):
    """
    raised when the alignments of a chimeric read cannot be interpreted

    for example if a row of the input file is missing its contig or names an unknown strand
    """
    pass


class AnnotationError(Exception):
    pass
