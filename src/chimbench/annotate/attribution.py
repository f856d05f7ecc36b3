from typing import Dict, Iterable, List, Optional, Tuple

from ..constants import GENE_PAIR_KEY, SIDE
from ..error import NoGeneOverlapError
from ..junction import Breakpoint, GenePair, Junction, JunctionCollection
from ..redundancy import reduce_redundancy
from ..util import logger
from .genomic import Annotation, GeneRecord


def overlapping_genes(breakpoint: Breakpoint, annotation: Annotation) -> List[str]:
    """
    distinct ids of the genes having an exon that overlaps the breakpoint position, on the same
    chromosome and strand. Genes are listed in the order of their overlapping exons
    """
    exons = annotation.index.overlapping(breakpoint.chr, breakpoint.strand, breakpoint.position)
    return reduce_redundancy([(breakpoint, exon.gene_id) for exon in exons]).get(breakpoint, [])


def best_gene(breakpoint: Breakpoint, annotation: Annotation) -> GeneRecord:
    """
    The most likely gene of a breakpoint, the overlapping gene with the most exons in the whole
    annotation. This is only an approximation of the gene actually broken. When several genes have
    the same number of exons, the first one listed wins

    Raises:
        NoGeneOverlapError: the breakpoint does not overlap any exon
    """
    gene_ids = overlapping_genes(breakpoint, annotation)
    if not gene_ids:
        nearest = annotation.index.nearest(breakpoint.chr, breakpoint.strand, breakpoint.position)
        raise NoGeneOverlapError(breakpoint, nearest[0] if nearest else None)
    best = annotation.gene(gene_ids[0])
    for gene_id in gene_ids[1:]:
        gene = annotation.gene(gene_id)
        if gene.exon_count > best.exon_count:
            best = gene
    return best


class JunctionGenes:
    """
    the genes attributed to the two breakpoints of a junction
    """

    def __init__(self, junction_id: str, donor_gene: GeneRecord, acceptor_gene: GeneRecord):
        self.junction_id = junction_id
        self.donor_gene = donor_gene
        self.acceptor_gene = acceptor_gene

    def gene_pair(self, key: str = GENE_PAIR_KEY.NAME) -> GenePair:
        """
        Args:
            key (GENE_PAIR_KEY): identify the genes by name (the id when the gene has no name) or by id
        """
        if GENE_PAIR_KEY.enforce(key) == GENE_PAIR_KEY.ID:
            return GenePair(self.donor_gene.gene_id, self.acceptor_gene.gene_id)
        return GenePair(self.donor_gene.label, self.acceptor_gene.label)

    def __repr__(self):
        return 'JunctionGenes({}, {}, {})'.format(
            self.junction_id, self.donor_gene.gene_id, self.acceptor_gene.gene_id
        )


class ExcludedJunction:
    """
    a junction left out of the gene level evaluation and why
    """

    def __init__(
        self, junction_id: str, reason: str, side: Optional[str] = None, nearest_distance: Optional[int] = None
    ):
        self.junction_id = junction_id
        self.reason = reason
        self.side = side
        self.nearest_distance = nearest_distance

    @property
    def is_error(self) -> bool:
        return self.side is None


class GeneAttribution:
    """
    the gene attribution of all the junctions of a collection
    """

    def __init__(self, attributed: Dict[str, JunctionGenes], excluded: List[ExcludedJunction]):
        self.attributed = attributed
        self.excluded = excluded

    @property
    def no_gene(self) -> List[ExcludedJunction]:
        return [e for e in self.excluded if not e.is_error]

    @property
    def errors(self) -> List[ExcludedJunction]:
        return [e for e in self.excluded if e.is_error]

    def gene_pairs(self, key: str = GENE_PAIR_KEY.NAME) -> Dict[str, GenePair]:
        """gene pair by junction id"""
        return {junction_id: genes.gene_pair(key) for junction_id, genes in self.attributed.items()}


def attribute_junction(junction: Junction, annotation: Annotation) -> JunctionGenes:
    """
    Raises:
        NoGeneOverlapError: either breakpoint overlaps no exon
    """
    genes = {}
    for side, breakpoint in [(SIDE.DONOR, junction.donor), (SIDE.ACCEPTOR, junction.acceptor)]:
        try:
            genes[side] = best_gene(breakpoint, annotation)
        except NoGeneOverlapError as err:
            err.side = side
            raise err
    return JunctionGenes(junction.id, genes[SIDE.DONOR], genes[SIDE.ACCEPTOR])


def attribute_junctions(junctions: JunctionCollection, annotation: Annotation) -> GeneAttribution:
    """
    attribute genes to every parsed junction of a collection. A junction that cannot be attributed
    is recorded as excluded and does not stop the others
    """
    attributed: Dict[str, JunctionGenes] = {}
    excluded: List[ExcludedJunction] = []
    for junction in junctions:
        try:
            attributed[junction.id] = attribute_junction(junction, annotation)
        except NoGeneOverlapError as err:
            logger.debug(f'no exon overlap for the {err.side} of {junction.id}')
            excluded.append(
                ExcludedJunction(
                    junction.id,
                    'no exon overlap',
                    side=err.side,
                    nearest_distance=err.nearest_distance,
                )
            )
        except (KeyError, ValueError, AttributeError) as err:
            logger.warning(f'could not attribute genes to {junction.id}: {repr(err)}')
            excluded.append(ExcludedJunction(junction.id, repr(err)))
    result = GeneAttribution(attributed, excluded)
    logger.info(
        f'attributed genes to {len(attributed)} of {len(junctions.junctions)} junctions '
        f'({len(result.no_gene)} without exon overlap, {len(result.errors)} errors)'
    )
    return result


def compare_gene_pairs(
    ref_pairs: Iterable[GenePair], pred_pairs: Iterable[GenePair]
) -> Tuple[List[GenePair], List[GenePair]]:
    """
    Compare the distinct gene pairs of the reference and of the predictions

    Returns:
        the reference pairs also predicted in the same order and the reference pairs only predicted
        in the swapped order, both in reference order

    Example:
        >>> compare_gene_pairs([GenePair('A', 'B'), GenePair('C', 'D')], [GenePair('A', 'B'), GenePair('B', 'A')])
        ([GenePair(A:B)], [])
    """
    ref_unique = list(dict.fromkeys(ref_pairs))
    pred_unique = set(pred_pairs)
    pred_swapped = {p.swapped() for p in pred_unique}
    same_order = [p for p in ref_unique if p in pred_unique]
    swapped_order = [p for p in ref_unique if p in pred_swapped and p not in pred_unique]
    return same_order, swapped_order
