"""
Comparison of two junction collections: exact matches, matches within a positional tolerance and
the ranking of the closest reference junctions for every predicted junction
"""
from typing import Dict, List, Optional, Tuple

from .constants import SIDE
from .error import EmptyInputError
from .interval import Interval, IntervalIndex
from .junction import Junction, JunctionCollection
from .redundancy import count_redundancy
from .util import logger

DEFAULT_TOLERANCE = 50


def percentage(numerator: int, denominator: int) -> float:
    """
    Raises:
        EmptyInputError: the denominator is zero and the rate is undefined

    Example:
        >>> percentage(1, 4)
        25.0
    """
    if denominator == 0:
        raise EmptyInputError('cannot compute a rate over an empty set', numerator, denominator)
    return numerator / denominator * 100


def exact_common(ref: JunctionCollection, pred: JunctionCollection) -> List[str]:
    """
    ids present in both collections, once each, in the order of the reference
    """
    return [junction_id for junction_id in ref.ids if junction_id in pred]


def sensitivity_precision(ref: JunctionCollection, pred: JunctionCollection) -> Tuple[float, float]:
    """
    sensitivity and precision (as percentages) of the exact matches

    Raises:
        EmptyInputError: either collection is empty
    """
    common = len(exact_common(ref, pred))
    return percentage(common, len(ref)), percentage(common, len(pred))


def side_windows(junction: Junction, tolerance: int):
    """
    the donor and acceptor windows extended by the tolerance on either side, as index entries
    """
    for side, breakpoint in [(SIDE.DONOR, junction.donor), (SIDE.ACCEPTOR, junction.acceptor)]:
        window = Interval.around(breakpoint.position, tolerance)
        yield breakpoint.chr, window.start, window.end, breakpoint.strand, (junction.id, side)


def find_close_matches(
    ref: JunctionCollection, pred: JunctionCollection, tolerance: int = DEFAULT_TOLERANCE
) -> Dict[str, List[str]]:
    """
    For every reference junction that is not an exact match, the predicted junctions whose donor
    window overlaps the reference donor window and whose acceptor window overlaps the reference
    acceptor window. Windows span the tolerance on either side of the breakpoint

    Returns:
        predicted ids (in order first found) by reference id, only references with at least one close match
    """
    pred_index = IntervalIndex(
        entry for junction in pred for entry in side_windows(junction, tolerance)
    )
    hits = []
    for junction in ref:
        if junction.id in pred:
            continue
        for chrom, start, end, strand, (_, side) in side_windows(junction, tolerance):
            for pred_id, pred_side in pred_index.overlapping(chrom, strand, start, end):
                if pred_side == side and pred_id != junction.id:
                    hits.append((junction.id, pred_id))

    close = {}
    # a prediction is close when both of its sides were hit
    for ref_id, counts in count_redundancy(hits).items():
        matches = [pred_id for pred_id, count in counts if count == 2]
        if matches:
            close[ref_id] = matches
    logger.info(
        f'{len(close)} reference junctions have a close but not exact prediction (tolerance={tolerance})'
    )
    return close


class MatchCandidate:
    """
    a target junction on the same chromosomes and strands as the query junction, with the distances
    between their breakpoints
    """

    def __init__(self, query_id: str, target_id: str, donor_distance: int, acceptor_distance: int):
        self.query_id = query_id
        self.target_id = target_id
        self.donor_distance = donor_distance
        self.acceptor_distance = acceptor_distance

    @property
    def sum_distance(self) -> int:
        return self.donor_distance + self.acceptor_distance

    @classmethod
    def from_junctions(cls, query: Junction, target: Junction) -> 'MatchCandidate':
        return cls(
            query.id,
            target.id,
            query.donor.distance(target.donor),
            query.acceptor.distance(target.acceptor),
        )

    def __repr__(self):
        return 'MatchCandidate({} vs {}, don={}, acc={})'.format(
            self.query_id, self.target_id, self.donor_distance, self.acceptor_distance
        )


class CandidateRanking:
    """
    all candidates of a single query junction and the best of them
    """

    def __init__(self, query_id: str, candidates: List[MatchCandidate], valid: bool = True):
        self.query_id = query_id
        self.candidates = candidates
        self.valid = valid
        self.best = select_best(candidates)

    @property
    def has_candidates(self) -> bool:
        return bool(self.candidates)

    @property
    def best_distance(self) -> Optional[int]:
        """sum distance of the best candidates, None when there is no candidate"""
        if not self.best:
            return None
        return self.best[0].sum_distance

    @property
    def best_ids(self) -> List[str]:
        return [c.target_id for c in self.best]

    def is_best(self, candidate: MatchCandidate) -> bool:
        return any([candidate is b for b in self.best])


def select_best(candidates: List[MatchCandidate]) -> List[MatchCandidate]:
    """
    The candidates minimizing both the donor and the acceptor distance. When no single candidate
    does, all candidates minimizing the sum of the two distances. Ties are all kept

    Example:
        >>> c1 = MatchCandidate('q', 'a', 1, 10)
        >>> c2 = MatchCandidate('q', 'b', 5, 2)
        >>> select_best([c1, c2])
        [MatchCandidate(q vs b, don=5, acc=2)]
    """
    if not candidates:
        return []
    min_donor = min([c.donor_distance for c in candidates])
    min_acceptor = min([c.acceptor_distance for c in candidates])
    best = [
        c
        for c in candidates
        if c.donor_distance == min_donor and c.acceptor_distance == min_acceptor
    ]
    if best:
        return best
    min_sum = min([c.sum_distance for c in candidates])
    return [c for c in candidates if c.sum_distance == min_sum]


def rank_candidates(
    queries: JunctionCollection, targets: JunctionCollection
) -> Dict[str, CandidateRanking]:
    """
    for every query junction, every target junction sharing its donor chromosome and strand and its
    acceptor chromosome and strand (no distance bound), with the best of them flagged.

    Queries which could not be parsed are reported with no candidates

    Returns:
        the rankings by query id, in query order
    """
    targets_by_reference: Dict[Tuple[str, str, str, str], List[Junction]] = {}
    for target in targets:
        targets_by_reference.setdefault(target.reference_key, []).append(target)

    rankings = {}
    for query_id in queries.ids:
        if query_id not in queries.junctions:
            rankings[query_id] = CandidateRanking(query_id, [], valid=False)
            continue
        query = queries[query_id]
        candidates = [
            MatchCandidate.from_junctions(query, target)
            for target in targets_by_reference.get(query.reference_key, [])
        ]
        rankings[query_id] = CandidateRanking(query_id, candidates)
    logger.info(
        f'{len([r for r in rankings.values() if r.has_candidates])} of {len(rankings)} junctions have '
        'a candidate on the same chromosomes and strands'
    )
    return rankings
