"""
module responsible for small utility functions and constants used throughout the fusionfinder package
"""
import os

PROGNAME = 'fusionfinder'
EXIT_OK = 0


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class FusionNamespace:
    """
    holds a controlled vocabulary (or a set of defaults) as attributes

    Example:
        >>> nspace = FusionNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
    """

    def __init__(self, *pos, **kwargs):
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_env_prefix', PROGNAME)

        for attr, val in [(k, k) for k in pos] + list(kwargs.items()):
            if attr in self._members:
                raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
            self.add(attr, val)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, ', '.join(sorted(['{}={}'.format(k, repr(v)) for k, v in self.items()])))

    def get_env_name(self, attr):
        """
        Example:
            >>> FusionNamespace(a=1).get_env_name('a')
            'FUSIONFINDER_A'
        """
        return '{}_{}'.format(self._env_prefix, attr).upper()

    def is_env_overwritable(self, attr):
        return False

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            members = object.__getattribute__(self, '_members')
            if attr not in members:
                raise err
            env_name = self.get_env_name(attr)
            if self.is_env_overwritable(attr) and env_name in os.environ:
                return self._types[attr](os.environ[env_name].strip())
            return members[attr]

    def __getitem__(self, key):
        return getattr(self, key)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        object.__getattribute__(self, '_members')[attr] = val

    def __iter__(self):
        return iter(self.keys())

    def __contains__(self, attr):
        return attr in self._members

    def keys(self):
        return list(self._members)

    def values(self):
        return [self[k] for k in self._members]

    def items(self):
        return [(k, self[k]) for k in self._members]

    def enforce(self, value):
        """
        checks that the current namespace has a given value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> STRAND.enforce('+')
            '+'
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def type(self, attr, *pos):
        if attr not in self._types and pos:
            return pos[0]
        return self._types[attr]

    def define(self, attr, *pos):
        """
        Get the definition of a given attribute or return a default (when given) if the attribute does not exist

        Raises:
            KeyError: the attribute does not exist and a default was not given
        """
        if attr not in self._defns and pos:
            return pos[0]
        return self._defns[attr]

    def add(self, attr, value, defn=None, cast_type=None):
        """
        Add an attribute to the name space

        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            defn (str): the definition, will be used in generating help menus
            cast_type (callable): the function to use in casting the value
        """
        cast_type = cast_type or type(value)
        self._types[attr] = cast_boolean if cast_type == bool else cast_type
        if defn:
            self._defns[attr] = defn
        setattr(self, attr, value)


class WeakFusionNamespace(FusionNamespace):
    """
    namespace where every attribute can be overridden by its environment variable equivalent
    """

    def is_env_overwritable(self, attr):
        return True


COMPLETE_STAMP = 'FUSIONFINDER.COMPLETE'
""":class:`str`: Filename for all complete stamp files"""

SUBCOMMAND = FusionNamespace(FIND='find')
""":class:`FusionNamespace`: holds controlled vocabulary for allowed pipeline stage values

- find
"""

STRAND = FusionNamespace(FORWARD='+', REVERSE='-')
""":class:`FusionNamespace`: holds controlled vocabulary for allowed strand values

- ``FORWARD``: the positive/forward strand
- ``REVERSE``: the negative/reverse strand
"""


def complement_strand(strand):
    """
    Example:
        >>> complement_strand(STRAND.FORWARD)
        '-'
    """
    if STRAND.enforce(strand) == STRAND.FORWARD:
        return STRAND.REVERSE
    return STRAND.FORWARD


def complement_strand_if(strand, condition):
    """
    returns the opposite strand when the condition holds, otherwise the strand itself
    """
    if condition:
        return complement_strand(strand)
    return STRAND.enforce(strand)


DIRECTION = FusionNamespace(UPSTREAM='upstream', DOWNSTREAM='downstream')
""":class:`FusionNamespace`: holds controlled vocabulary for the side of a breakpoint the fused partner lies on

- ``UPSTREAM``: the partner is joined before the retained segment (the breakpoint is the segment start)
- ``DOWNSTREAM``: the partner is joined after the retained segment (the breakpoint is the segment end)
"""

TRANSCRIPT_START = FusionNamespace(GENE1='gene1', GENE2='gene2')
""":class:`FusionNamespace`: holds controlled vocabulary for which gene makes the 5' end of the fused transcript

- ``GENE1``: gene1 is transcribed first
- ``GENE2``: gene2 is transcribed first
"""

FILTER = FusionNamespace(
    HAIRPIN='hairpin',
    DUPLICATES='duplicates',
    HOMOPOLYMER='homopolymer',
    LOW_ENTROPY='low_entropy',
    MISMAPPERS='mismappers',
    MULTIMAPPERS='multimappers',
    SMALL_INSERT_SIZE='small_insert_size',
    SAME_GENE='same_gene',
)
""":class:`FusionNamespace`: holds controlled vocabulary for the filters applied to chimeric alignments upstream

- ``HAIRPIN``: the mates fold back onto each other, so their orientation is ambiguous
- ``DUPLICATES``: PCR/optical duplicate
- ``HOMOPOLYMER``: the breakpoint is adjacent to a homopolymer
- ``LOW_ENTROPY``: the aligned segment has low sequence complexity
- ``MISMAPPERS``: the segment maps better elsewhere
- ``MULTIMAPPERS``: the segment has multiple equally good alignments
- ``SMALL_INSERT_SIZE``: the mates overlap
- ``SAME_GENE``: both segments map to the same gene
"""

COLUMNS = FusionNamespace(
    gene1='gene1',
    gene2='gene2',
    strand1='strand1',
    strand2='strand2',
    breakpoint1='breakpoint1',
    breakpoint2='breakpoint2',
    contig1='contig1',
    contig2='contig2',
    direction1='direction1',
    direction2='direction2',
    exonic1='exonic1',
    exonic2='exonic2',
    anchor_start1='anchor_start1',
    anchor_start2='anchor_start2',
    split_reads1='split_reads1',
    split_reads2='split_reads2',
    discordant_mates='discordant_mates',
    overlap_duplicate1='overlap_duplicate1',
    overlap_duplicate2='overlap_duplicate2',
    spliced1='spliced1',
    spliced2='spliced2',
    transcript_start='transcript_start',
    transcript_start_ambiguous='transcript_start_ambiguous',
    predicted_strands_ambiguous='predicted_strands_ambiguous',
    filter='filter',
    # chimeric alignment input columns
    name='name',
    role='role',
    contig='contig',
    start='start',
    end='end',
    strand='strand',
    predicted_strand='predicted_strand',
    predicted_strand_ambiguous='predicted_strand_ambiguous',
    genes='genes',
    exonic='exonic',
    alignment_filter='alignment_filter',
)
""":class:`FusionNamespace`: Column names for i/o files

- ``gene1``/``gene2``: name of the gene at each breakpoint
- ``strand1``/``strand2``: predicted transcribed strand at each breakpoint ('.' if ambiguous)
- ``contig1``/``breakpoint1``: canonically ordered position of the first breakpoint
- ``direction1``/``direction2``: side of each breakpoint on which the fused partner lies
- ``split_reads1``/``split_reads2``: unfiltered split reads anchored on each side
- ``discordant_mates``: unfiltered discordant mate pairs supporting the fusion
- ``transcript_start``: which gene is predicted to make the 5' end of the transcript
- ``filter``: name of the filter which removed the fusion (if any)
- ``name``/``role``: read name and role of a single alignment in the chimeric alignment input
"""

ROLE = FusionNamespace(MATE1='mate1', MATE2='mate2', SPLIT_READ='split_read', SUPPLEMENTARY='supplementary')
""":class:`FusionNamespace`: roles of the alignments in a chimeric alignment input file"""


def sort_columns(input_columns):
    order = {}
    for i, col in enumerate(COLUMNS.values()):
        order[col] = i
    temp = sorted([c for c in input_columns if c in order], key=lambda x: order[x])
    temp = temp + sorted([c for c in input_columns if c not in order])
    return temp
