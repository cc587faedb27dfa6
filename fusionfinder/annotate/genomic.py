from ..constants import DIRECTION, STRAND


class Exon:
    """
    an exon as a closed genomic interval
    """

    def __init__(self, start, end, name=None):
        """
        Args:
            start (int): the genomic start position
            end (int): the genomic end position
            name (str): the name of the exon

        Raises:
            AttributeError: if the exon start > the exon end

        Example:
            >>> Exon(15, 78)
        """
        start = int(start)
        end = int(end)
        if start > end:
            raise AttributeError('exon start must be less than or equal to the end', start, end)
        self.start = start
        self.end = end
        self.name = name

    def __repr__(self):
        return 'Exon({}-{})'.format(self.start, self.end)


class Transcript:
    """
    an unspliced transcript. exons are kept sorted by genomic position regardless of strand
    """

    def __init__(self, exons, name=None, gene=None):
        self.name = name
        self.gene = gene
        self.exons = sorted(exons, key=lambda x: (x.start, x.end))

    def splice_sites(self, direction):
        """
        the genomic positions where an intron starts or ends

        Args:
            direction (DIRECTION): DOWNSTREAM for the last base of an exon followed by an intron,
                UPSTREAM for the first base of an exon preceded by an intron

        Returns:
            set of int: positions at the exon boundaries facing an intron
        """
        if DIRECTION.enforce(direction) == DIRECTION.DOWNSTREAM:
            return {exon.end for exon in self.exons[:-1]}
        return {exon.start for exon in self.exons[1:]}


class Gene:
    """
    a gene annotation. genes compare by identity so that distinct annotations sharing
    a name remain distinct fusion partners
    """

    def __init__(self, chr, start, end, name=None, strand=STRAND.FORWARD, aliases=None):
        """
        Args:
            chr (str): the chromosome
            start (int): the genomic start of the gene
            end (int): the genomic end of the gene
            name (str): the gene name/id i.e. ENSG0001
            strand (STRAND): the genomic strand '+' or '-'
            aliases (:class:`list` of :class:`str`): a list of aliases. For example the hugo name could go here

        Example:
            >>> Gene('X', 1, 1000, 'ENG0001', '+', ['KRAS'])
        """
        self.chr = chr
        self.start = int(start)
        self.end = int(end)
        self.name = name
        self.strand = STRAND.enforce(strand)
        self.aliases = [] if aliases is None else aliases
        self.transcripts = []
        self._splice_sites = {}

    def add_transcript(self, exons, name=None):
        transcript = Transcript(exons, name=name, gene=self)
        self.transcripts.append(transcript)
        self._splice_sites.clear()
        return transcript

    def splice_sites(self, direction):
        """
        union of the splice sites of all transcripts of this gene
        """
        if direction not in self._splice_sites:
            sites = set()
            for transcript in self.transcripts:
                sites.update(transcript.splice_sites(direction))
            self._splice_sites[direction] = sites
        return self._splice_sites[direction]

    def __repr__(self):
        return 'Gene({}:{}-{}{} {})'.format(self.chr, self.start, self.end, self.strand, self.name)

    def __str__(self):
        return str(self.name)
