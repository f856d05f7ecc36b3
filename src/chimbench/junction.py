import re
from typing import Dict, Iterable, List, Optional

from .constants import BREAKPOINT_DELIM, GENE_PAIR_DELIM, JUNCTION_ID_DELIM, STRAND, UNKNOWN_COORDINATE
from .error import MalformedJunctionError
from .interval import Interval

BREAKPOINT_PATTERN = re.compile(r'^(?P<chr>\S+)_(?P<pos>\d+)_(?P<strand>[+-])$')


class Breakpoint(Interval):
    """
    a single stranded genomic position. coordinates are given as 1-indexed
    """

    chr: str
    strand: str

    def __init__(self, chr: str, position: int, strand: str):
        """
        Args:
            chr: the chromosome
            position: the genomic position of the breakpoint
            strand (STRAND): the strand

        Examples:
            >>> Breakpoint('chr1', 100, '+')
            Breakpoint(chr1:100+)
        """
        if not chr:
            raise AttributeError('a breakpoint requires a chromosome')
        Interval.__init__(self, position)
        if self.start < 1:
            raise AttributeError('breakpoint position must be a positive integer', position)
        self.chr = str(chr)
        self.strand = STRAND.enforce(strand)

    @property
    def position(self) -> int:
        return self.start

    @property
    def key(self):
        return (self.chr, self.start, self.strand)

    def __repr__(self):
        return 'Breakpoint({}:{}{})'.format(self.chr, self.start, self.strand)

    def __str__(self):
        return BREAKPOINT_DELIM.join([self.chr, str(self.start), self.strand])

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def same_reference(self, other: 'Breakpoint') -> bool:
        """
        True if both breakpoints are on the same chromosome and strand. Distances and overlaps are
        only defined between breakpoints on the same reference
        """
        return self.chr == other.chr and self.strand == other.strand

    def distance(self, other: 'Breakpoint') -> int:
        """
        absolute distance between two breakpoints on the same chromosome and strand

        Raises:
            ValueError: if the breakpoints are not on the same chromosome and strand
        """
        if not self.same_reference(other):
            raise ValueError('distance is undefined between different references', self, other)
        return abs(self.start - other.start)

    @classmethod
    def parse(cls, string: str) -> 'Breakpoint':
        """
        Example:
            >>> Breakpoint.parse('chr1_100_+')
            Breakpoint(chr1:100+)
        """
        match = BREAKPOINT_PATTERN.match(string)
        if not match:
            raise MalformedJunctionError('breakpoint does not follow the chr_pos_strand pattern', string)
        return cls(match.group('chr'), int(match.group('pos')), match.group('strand'))


class Junction:
    """
    A chimeric junction, the pair of breakpoints of a discontinuous splicing/fusion event
    """

    id: str
    donor: Breakpoint
    acceptor: Breakpoint

    def __init__(self, donor: Breakpoint, acceptor: Breakpoint, id: Optional[str] = None):
        self.donor = donor
        self.acceptor = acceptor
        self.id = id if id is not None else self.canonical_id(donor, acceptor)

    @staticmethod
    def canonical_id(donor: Breakpoint, acceptor: Breakpoint) -> str:
        """
        Example:
            >>> Junction.canonical_id(Breakpoint('chr1', 100, '+'), Breakpoint('chr2', 500, '+'))
            'chr1_100_+:chr2_500_+'
        """
        return JUNCTION_ID_DELIM.join([str(donor), str(acceptor)])

    @classmethod
    def parse(cls, junction_id: str) -> 'Junction':
        """
        create a junction from its id. The chromosome names may themselves contain underscores

        Raises:
            MalformedJunctionError: the id has an unknown coordinate or does not follow the pattern
        """
        if UNKNOWN_COORDINATE in junction_id:
            raise MalformedJunctionError('junction has an unknown coordinate', junction_id)
        sides = junction_id.split(JUNCTION_ID_DELIM)
        if len(sides) != 2:
            raise MalformedJunctionError('junction id must have exactly two sides', junction_id)
        donor, acceptor = [Breakpoint.parse(s) for s in sides]
        return cls(donor, acceptor, id=junction_id)

    def __eq__(self, other):
        if not hasattr(other, 'id'):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return 'Junction({!r}, {!r})'.format(self.donor, self.acceptor)

    def __str__(self):
        return self.id

    @property
    def reference_key(self):
        """the chromosome and strand of both sides. Only junctions sharing this key are compared"""
        return (self.donor.chr, self.donor.strand, self.acceptor.chr, self.acceptor.strand)


class JunctionCollection:
    """
    The junctions read from a reference or prediction file.

    Keeps the de-duplicated ids in the order first seen (used for exact matching) apart from the
    parsed junctions (used for overlap and distance computations). Ids with unknown coordinates are
    still counted as ids but never parsed
    """

    def __init__(self, junction_ids: Iterable[str]):
        self.ids: List[str] = []
        self.junctions: Dict[str, Junction] = {}
        self.invalid: List[str] = []
        self.discarded: List[str] = []
        self._id_set = set()
        seen = set()
        for junction_id in junction_ids:
            junction_id = str(junction_id).strip()
            if not junction_id or junction_id in seen:
                continue
            seen.add(junction_id)
            if JUNCTION_ID_DELIM not in junction_id:
                self.discarded.append(junction_id)
                continue
            self.ids.append(junction_id)
            self._id_set.add(junction_id)
            try:
                self.junctions[junction_id] = Junction.parse(junction_id)
            except MalformedJunctionError:
                self.invalid.append(junction_id)

    def __len__(self):
        return len(self.ids)

    def __contains__(self, junction_id):
        return junction_id in self._id_set

    def __iter__(self):
        return iter(self.junctions.values())

    def __getitem__(self, junction_id) -> Junction:
        return self.junctions[junction_id]

    def subset(self, junction_ids: Iterable[str]) -> 'JunctionCollection':
        """
        new collection restricted to the given ids, keeping the order of the current collection
        """
        keep = set(junction_ids)
        return JunctionCollection([j for j in self.ids if j in keep])


class GenePair:
    """
    ordered pair of the genes attributed to the donor and acceptor sides of a junction
    """

    def __init__(self, donor_gene: str, acceptor_gene: str):
        self.donor_gene = donor_gene
        self.acceptor_gene = acceptor_gene

    @property
    def key(self):
        return (self.donor_gene, self.acceptor_gene)

    def swapped(self) -> 'GenePair':
        """
        Example:
            >>> GenePair('A', 'B').swapped()
            GenePair(B:A)
        """
        return GenePair(self.acceptor_gene, self.donor_gene)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __str__(self):
        return GENE_PAIR_DELIM.join(self.key)

    def __repr__(self):
        return 'GenePair({})'.format(str(self))
