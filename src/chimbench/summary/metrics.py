from typing import Dict, List, Optional, Tuple

import numpy as np

from ..constants import DISTRIBUTION_DELIM, SUMMARY_KEYS, UNDEFINED
from ..error import EmptyInputError
from ..junction import GenePair, JunctionCollection
from ..matching import CandidateRanking, percentage, rank_candidates


def rate(numerator: int, denominator: int) -> Optional[float]:
    """
    percentage, None when it is undefined (empty denominator)

    Example:
        >>> rate(1, 2)
        50.0
        >>> rate(0, 0)
    """
    try:
        return percentage(numerator, denominator)
    except EmptyInputError:
        return None


def format_value(value) -> str:
    """
    render a summary value the way it is reported

    Example:
        >>> format_value(83.33333333)
        '83.3333'
        >>> format_value(None)
        'NA'
    """
    if value is None:
        return UNDEFINED
    if isinstance(value, (float, np.floating)):
        return '{:.6g}'.format(value)
    return str(value)


class DistanceDistribution:
    """
    Summary statistics of the best donor+acceptor distances of the common gene pairs.

    The count is the number of gene pairs, the statistics are computed over the pairs which had a
    distance (pairs with no candidate junction are counted but have no value)
    """

    def __init__(self, distances: List[int], count: Optional[int] = None):
        self.distances = np.array(distances, dtype=float)
        self.count = len(distances) if count is None else count
        if len(self.distances):
            self.minimum = float(np.min(self.distances))
            self.maximum = float(np.max(self.distances))
            self.q1, self.median, self.q3 = [
                float(v) for v in np.percentile(self.distances, [25, 50, 75])
            ]
            self.mean = float(np.mean(self.distances))
            self.sd = float(np.std(self.distances))
        else:
            self.minimum = self.maximum = self.q1 = self.median = self.q3 = None
            self.mean = self.sd = None

    def to_dict(self) -> Dict:
        return {
            'min': self.minimum,
            'max': self.maximum,
            'q1': self.q1,
            'median': self.median,
            'q3': self.q3,
            'mean': self.mean,
            'count': self.count,
            'sd': self.sd,
        }

    def __str__(self):
        """
        min:max:q1:median:q3:mean:count:mean:sd
        """

        def fmt(value):
            return UNDEFINED if value is None else '{:.1f}'.format(value)

        return DISTRIBUTION_DELIM.join(
            [
                fmt(self.minimum),
                fmt(self.maximum),
                fmt(self.q1),
                fmt(self.median),
                fmt(self.q3),
                fmt(self.mean),
                str(self.count),
                fmt(self.mean),
                fmt(self.sd),
            ]
        )


class GenePairDistance:
    """
    the closest pair of reference and predicted junctions of a common gene pair
    """

    def __init__(
        self,
        gene_pair: GenePair,
        ref_junction: Optional[str] = None,
        best_junction: Optional[str] = None,
        best_distance: Optional[int] = None,
    ):
        self.gene_pair = gene_pair
        self.ref_junction = ref_junction
        self.best_junction = best_junction
        self.best_distance = best_distance


def gene_pair_distances(
    common_pairs: List[GenePair],
    ref: JunctionCollection,
    pred: JunctionCollection,
    ref_pairs: Dict[str, GenePair],
    pred_pairs: Dict[str, GenePair],
) -> Tuple[Dict[str, CandidateRanking], List[GenePairDistance]]:
    """
    Rank the predicted junctions of the common gene pairs against each reference junction of the
    common gene pairs, then keep for every gene pair the smallest best distance over its reference
    junctions

    Args:
        common_pairs: gene pairs found in the same order in the reference and predictions
        ref_pairs: gene pair of each attributed reference junction
        pred_pairs: gene pair of each attributed predicted junction

    Returns:
        the rankings by reference junction id and the best distance of each common gene pair
    """
    common = set(common_pairs)
    ref_selected = ref.subset([j for j, pair in ref_pairs.items() if pair in common])
    pred_selected = pred.subset([j for j, pair in pred_pairs.items() if pair in common])
    rankings = rank_candidates(ref_selected, pred_selected)

    by_pair = {pair: GenePairDistance(pair) for pair in common_pairs}
    for junction_id, ranking in rankings.items():
        current = by_pair[ref_pairs[junction_id]]
        distance = ranking.best_distance
        if distance is None:
            continue
        if current.best_distance is None or distance < current.best_distance:
            current.ref_junction = junction_id
            current.best_junction = ranking.best_ids[0]
            current.best_distance = distance
    return rankings, [by_pair[pair] for pair in common_pairs]


def junction_level_metrics(
    ref: JunctionCollection,
    pred: JunctionCollection,
    common: List[str],
    close_matches: Dict[str, List[str]],
    rankings: Dict[str, CandidateRanking],
) -> Dict:
    return {
        'ref': len(ref),
        'pred': len(pred),
        'common': len(common),
        'ref_not_in_common': len(ref) - len(common),
        'pred_not_in_common': len(pred) - len(common),
        'sensitivity': rate(len(common), len(ref)),
        'precision': rate(len(common), len(pred)),
        'close_not_exact': len(close_matches),
        'samechrstr': len([r for r in rankings.values() if r.has_candidates]),
        'ref_invalid': len(ref.invalid),
        'pred_invalid': len(pred.invalid),
        'ref_discarded': len(ref.discarded),
        'pred_discarded': len(pred.discarded),
    }


def gene_level_metrics(
    ref_pairs: Dict[str, GenePair],
    pred_pairs: Dict[str, GenePair],
    same_order: List[GenePair],
    swapped_order: List[GenePair],
) -> Dict:
    refgn = len(set(ref_pairs.values()))
    predgn = len(set(pred_pairs.values()))
    commongn = len(same_order)
    return {
        'refgn': refgn,
        'predgn': predgn,
        'commongn': commongn,
        'refgn_not_in_commongn': refgn - commongn,
        'predgn_not_in_commongn': predgn - commongn,
        'sngn': rate(commongn, refgn),
        'precgn': rate(commongn, predgn),
        'commongn2': len(swapped_order),
    }


def distance_distribution(distances: List[GenePairDistance]) -> DistanceDistribution:
    return DistanceDistribution(
        [d.best_distance for d in distances if d.best_distance is not None], count=len(distances)
    )


def summary_rows(summary: Dict) -> List[Tuple[str, str]]:
    """
    the summary as (key, rendered value) rows in report order. Keys missing from the summary are skipped
    """
    return [(key, format_value(summary[key])) for key in SUMMARY_KEYS if key in summary]
