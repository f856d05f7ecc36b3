import pytest
from chimbench.interval import Interval, IntervalIndex


class TestInterval:
    def test___init__error(self):
        with pytest.raises(AttributeError):
            Interval(4, 3)

    def test_single_position(self):
        interval = Interval(5)
        assert interval.start == 5
        assert interval.end == 5

    def test_repr(self):
        assert repr(Interval(1, 2)) == 'Interval(1, 2)'

    def test_around(self):
        window = Interval.around(100, 50)
        assert (window.start, window.end) == (50, 150)
        window = Interval.around(100, 0)
        assert (window.start, window.end) == (100, 100)

    def test_around_clamped_to_reference_start(self):
        window = Interval.around(10, 50)
        assert (window.start, window.end) == (1, 60)

    def test_around_negative_flank_error(self):
        with pytest.raises(ValueError):
            Interval.around(100, -1)


@pytest.fixture
def index():
    return IntervalIndex(
        [
            ('chr1', 10, 20, '+', 'a'),
            ('chr1', 15, 30, '+', 'b'),
            ('chr1', 1, 100, '+', 'c'),
            ('chr1', 200, 210, '+', 'd'),
            ('chr1', 10, 20, '-', 'e'),
        ]
    )


class TestIntervalIndex:
    def test_len(self, index):
        assert len(index) == 5
        assert sorted(index.keys()) == [('chr1', '+'), ('chr1', '-')]

    def test_overlapping_position(self, index):
        assert index.overlapping('chr1', '+', 18) == ['c', 'a', 'b']

    def test_overlapping_behind_long_interval(self, index):
        # only the long interval reaches past the end of the short ones
        assert index.overlapping('chr1', '+', 50) == ['c']

    def test_overlapping_range(self, index):
        assert index.overlapping('chr1', '+', 90, 205) == ['c', 'd']

    def test_overlapping_is_strand_specific(self, index):
        assert index.overlapping('chr1', '-', 18) == ['e']

    def test_overlapping_missing_chromosome(self, index):
        assert index.overlapping('chr2', '+', 18) == []

    def test_overlapping_bounds_inclusive(self, index):
        assert index.overlapping('chr1', '+', 210) == ['d']
        assert index.overlapping('chr1', '+', 211) == []

    def test_start_after_end_error(self):
        with pytest.raises(AttributeError):
            IntervalIndex([('chr1', 10, 5, '+', 'a')])


class TestNearest:
    @pytest.fixture
    def index(self):
        return IntervalIndex([('chr1', 10, 20, '+', 'a'), ('chr1', 40, 50, '+', 'b')])

    def test_overlapping(self, index):
        assert index.nearest('chr1', '+', 15) == (0, ['a'])

    def test_upstream(self, index):
        assert index.nearest('chr1', '+', 25) == (5, ['a'])

    def test_downstream(self, index):
        assert index.nearest('chr1', '+', 35) == (5, ['b'])

    def test_equidistant(self, index):
        assert index.nearest('chr1', '+', 30) == (10, ['a', 'b'])

    def test_before_first(self, index):
        assert index.nearest('chr1', '+', 1) == (9, ['a'])

    def test_after_last(self, index):
        assert index.nearest('chr1', '+', 60) == (10, ['b'])

    def test_no_intervals(self, index):
        assert index.nearest('chr1', '-', 15) is None
        assert index.nearest('chr2', '+', 15) is None
