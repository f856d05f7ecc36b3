import pytest
from chimbench.error import EmptyInputError
from chimbench.junction import JunctionCollection
from chimbench.matching import (
    MatchCandidate,
    exact_common,
    find_close_matches,
    percentage,
    rank_candidates,
    select_best,
    sensitivity_precision,
)

from ..util import J1, J2, J3, J3_SWAPPED, UNKNOWN


class TestExactCommon:
    def test_duplicates_reported_once(self):
        ref = JunctionCollection([J1, J1, J3])
        pred = JunctionCollection([J3, J1, J1, J2])
        assert exact_common(ref, pred) == [J1, J3]

    def test_unknown_coordinates_match_exactly(self):
        ref = JunctionCollection([UNKNOWN])
        pred = JunctionCollection([UNKNOWN])
        assert exact_common(ref, pred) == [UNKNOWN]

    def test_no_overlap(self):
        assert exact_common(JunctionCollection([J1]), JunctionCollection([J2])) == []


class TestSensitivityPrecision:
    def test_rates(self):
        ref = JunctionCollection([J1, J3])
        pred = JunctionCollection([J1, J2, J3_SWAPPED, UNKNOWN])
        sensitivity, precision = sensitivity_precision(ref, pred)
        assert sensitivity == 50
        assert precision == 25

    def test_full_sensitivity_when_reference_is_predicted(self):
        ref = JunctionCollection([J1, J3])
        pred = JunctionCollection([J3, J2, J1])
        sensitivity, precision = sensitivity_precision(ref, pred)
        assert sensitivity == 100
        assert precision < 100

    def test_full_precision_when_predictions_are_in_reference(self):
        ref = JunctionCollection([J1, J3])
        pred = JunctionCollection([J1])
        sensitivity, precision = sensitivity_precision(ref, pred)
        assert sensitivity < 100
        assert precision == 100

    def test_empty_predictions_error(self):
        with pytest.raises(EmptyInputError):
            sensitivity_precision(JunctionCollection([J1]), JunctionCollection([]))

    def test_percentage_empty_error(self):
        with pytest.raises(EmptyInputError):
            percentage(0, 0)


class TestFindCloseMatches:
    def test_within_tolerance(self):
        ref = JunctionCollection([J1])
        pred = JunctionCollection([J2])
        assert find_close_matches(ref, pred, 50) == {J1: [J2]}

    def test_outside_tolerance(self):
        ref = JunctionCollection([J1])
        pred = JunctionCollection([J2])
        assert find_close_matches(ref, pred, 2) == {}

    def test_exact_matches_skipped(self):
        ref = JunctionCollection([J1])
        pred = JunctionCollection([J1, J2])
        assert find_close_matches(ref, pred, 50) == {}

    def test_single_side_is_not_close(self):
        ref = JunctionCollection([J1])
        pred = JunctionCollection(['chr1_101_+:chr2_900_+', 'chr1_101_+:chr2_502_-'])
        assert find_close_matches(ref, pred, 50) == {}

    def test_sides_are_not_interchangeable(self):
        ref = JunctionCollection(['chr1_100_+:chr1_200_+'])
        pred = JunctionCollection(['chr1_200_+:chr1_100_+'])
        assert find_close_matches(ref, pred, 10) == {}

    def test_multiple_close_predictions(self):
        other = 'chr1_110_+:chr2_510_+'
        ref = JunctionCollection([J1])
        pred = JunctionCollection([J2, other])
        assert find_close_matches(ref, pred, 50) == {J1: [J2, other]}

    def test_invalid_reference_ignored(self):
        ref = JunctionCollection([UNKNOWN])
        pred = JunctionCollection([J1])
        assert find_close_matches(ref, pred, 50) == {}


class TestSelectBest:
    def test_no_candidates(self):
        assert select_best([]) == []

    def test_minimal_on_both_sides(self):
        best = MatchCandidate('q', 'a', 1, 2)
        assert select_best([MatchCandidate('q', 'b', 3, 2), best, MatchCandidate('q', 'c', 1, 5)]) == [best]

    def test_minimal_sum(self):
        candidates = [
            MatchCandidate('q', 'a', 1, 10),
            MatchCandidate('q', 'b', 5, 2),
            MatchCandidate('q', 'c', 3, 3),
        ]
        best = select_best(candidates)
        assert [c.target_id for c in best] == ['c']
        min_sum = min([c.sum_distance for c in candidates])
        assert all([c.sum_distance <= min_sum for c in best])

    def test_ties_kept(self):
        candidates = [MatchCandidate('q', 'a', 2, 4), MatchCandidate('q', 'b', 4, 2)]
        assert [c.target_id for c in select_best(candidates)] == ['a', 'b']


class TestRankCandidates:
    def test_nearest_reference(self):
        rankings = rank_candidates(JunctionCollection([J1, J2]), JunctionCollection([J1]))
        ranking = rankings[J2]
        assert ranking.best_ids == [J1]
        best = ranking.best[0]
        assert best.donor_distance == 3
        assert best.acceptor_distance == 5
        assert best.sum_distance == 8
        assert ranking.best_distance == 8
        assert rankings[J1].best_distance == 0

    def test_query_order(self):
        rankings = rank_candidates(JunctionCollection([J3, J1, J2]), JunctionCollection([J1]))
        assert list(rankings.keys()) == [J3, J1, J2]

    def test_no_candidate_on_other_strand(self):
        rankings = rank_candidates(JunctionCollection([J3_SWAPPED]), JunctionCollection([J3]))
        ranking = rankings[J3_SWAPPED]
        assert not ranking.has_candidates
        assert ranking.best_distance is None
        assert ranking.best_ids == []

    def test_all_candidates_listed(self):
        far = 'chr1_5000_+:chr2_1_+'
        rankings = rank_candidates(JunctionCollection([J2]), JunctionCollection([far, J1]))
        ranking = rankings[J2]
        assert [c.target_id for c in ranking.candidates] == [far, J1]
        assert ranking.best_ids == [J1]
        assert ranking.is_best(ranking.candidates[1])
        assert not ranking.is_best(ranking.candidates[0])

    def test_invalid_query(self):
        rankings = rank_candidates(JunctionCollection([UNKNOWN]), JunctionCollection([J1]))
        assert not rankings[UNKNOWN].valid
        assert not rankings[UNKNOWN].has_candidates
