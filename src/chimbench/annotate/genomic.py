from typing import Dict, Iterable, List, Optional, Tuple

from ..constants import STRAND
from ..error import MissingAnnotationFieldError
from ..interval import Interval, IntervalIndex
from ..util import logger


class ExonInterval(Interval):
    """
    an annotated exon, one record per exon row of the annotation (exons shared between
    transcripts are repeated)
    """

    def __init__(
        self,
        chr: str,
        start: int,
        end: int,
        strand: str,
        gene_id: Optional[str],
        transcript_id: Optional[str],
    ):
        """
        Args:
            chr: the chromosome
            start: start of the exon (inclusive)
            end: end of the exon (inclusive)
            strand (STRAND): the strand
            gene_id: id of the gene the exon belongs to
            transcript_id: id of the transcript the exon belongs to

        Raises:
            MissingAnnotationFieldError: gene_id or transcript_id is missing

        Example:
            >>> ExonInterval('chr1', 11869, 12227, '+', 'ENSG00000223972.4', 'ENST00000456328.2')
        """
        if not gene_id or not transcript_id:
            raise MissingAnnotationFieldError(
                'exon requires both a gene_id and a transcript_id', chr, start, end, gene_id, transcript_id
            )
        Interval.__init__(self, start, end)
        self.chr = str(chr)
        self.strand = STRAND.enforce(strand)
        self.gene_id = gene_id
        self.transcript_id = transcript_id

    @property
    def key(self):
        return (self.chr, self.start, self.end, self.strand, self.gene_id, self.transcript_id)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return 'ExonInterval({}:{}-{}{}, {}, {})'.format(
            self.chr, self.start, self.end, self.strand, self.gene_id, self.transcript_id
        )


class GeneRecord:
    """
    summary of a gene from the annotation: its name and how many exon records it has
    """

    def __init__(self, gene_id: str, gene_name: str = '', exon_count: int = 0):
        self.gene_id = gene_id
        self.gene_name = gene_name
        self.exon_count = exon_count

    @property
    def label(self) -> str:
        """the gene name, or the gene id when the annotation has no name for it"""
        return self.gene_name if self.gene_name else self.gene_id

    def __repr__(self):
        return 'GeneRecord({}, {!r}, exon_count={})'.format(self.gene_id, self.gene_name, self.exon_count)


def build_gene_records(
    exons: Iterable[ExonInterval], names: Iterable[Tuple[str, str]] = ()
) -> Dict[str, GeneRecord]:
    """
    Args:
        exons: the exon records
        names: (gene_id, gene_name) pairs in annotation order. Only the first name seen for a given
            gene id is kept, even if the annotation later gives it another name

    Returns:
        the gene records by gene id, in order of the first exon of each gene
    """
    genes: Dict[str, GeneRecord] = {}
    for exon in exons:
        gene = genes.setdefault(exon.gene_id, GeneRecord(exon.gene_id))
        gene.exon_count += 1
    seen = set()
    for gene_id, gene_name in names:
        if gene_id in seen:
            continue
        seen.add(gene_id)
        if gene_id in genes:
            genes[gene_id].gene_name = gene_name if gene_name else ''
    return genes


class Annotation:
    """
    the exons of the reference annotation and the gene records derived from them
    """

    def __init__(
        self,
        exons: List[ExonInterval],
        genes: Optional[Dict[str, GeneRecord]] = None,
        skipped: int = 0,
    ):
        """
        Args:
            exons: the exon records
            genes: gene records by id, computed from the exons if not given
            skipped: the number of exon rows of the source file that could not be used
        """
        self.exons = exons
        self.genes = genes if genes is not None else build_gene_records(exons)
        self.skipped = skipped
        self._index: Optional[IntervalIndex] = None

    @property
    def index(self) -> IntervalIndex:
        """exon index built on first use"""
        if self._index is None:
            logger.info(f'indexing {len(self.exons)} exons')
            self._index = IntervalIndex(
                (exon.chr, exon.start, exon.end, exon.strand, exon) for exon in self.exons
            )
        return self._index

    def gene(self, gene_id: str) -> GeneRecord:
        return self.genes[gene_id]

    def __len__(self):
        return len(self.exons)
