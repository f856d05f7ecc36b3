from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple

import numpy as np


class Interval:
    """
    closed integer interval, 1-based coordinates
    """

    def __init__(self, start: int, end: Optional[int] = None):
        """
        Args:
            start: the start of the interval (inclusive)
            end: the end of the interval (inclusive)
        """
        self.start = int(start)
        self.end = int(end) if end is not None else self.start
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    @classmethod
    def around(cls, position: int, flank: int, min_start: int = 1) -> 'Interval':
        """
        the window of a given flank on either side of a position, clamped to the start of the reference

        Example:
            >>> Interval.around(100, 50)
            Interval(50, 150)
            >>> Interval.around(10, 50)
            Interval(1, 60)
        """
        if flank < 0:
            raise ValueError('flank cannot be negative', flank)
        return cls(max(min_start, position - flank), position + flank)


class _IndexGroup:
    """
    the intervals of a single chromosome/strand, sorted by start
    """

    def __init__(self, entries: List[Tuple[int, int, Any]]):
        entries = sorted(entries, key=lambda e: (e[0], e[1]))
        self.starts = np.array([e[0] for e in entries], dtype=np.int64)
        self.ends = np.array([e[1] for e in entries], dtype=np.int64)
        self.payloads = [e[2] for e in entries]
        # running max of the ends is monotonic so it can be binary searched
        self.max_ends = np.maximum.accumulate(self.ends) if entries else self.ends
        self.end_order = np.argsort(self.ends, kind='stable')
        self.sorted_ends = self.ends[self.end_order]

    def __len__(self):
        return len(self.payloads)

    def overlapping(self, start: int, end: int) -> List[Any]:
        first = int(np.searchsorted(self.max_ends, start, side='left'))
        last = int(np.searchsorted(self.starts, end, side='right'))
        result = []
        for i in range(first, last):
            if self.ends[i] >= start:
                result.append(self.payloads[i])
        return result

    def nearest(self, position: int) -> Tuple[int, List[Any]]:
        hits = self.overlapping(position, position)
        if hits:
            return 0, hits
        best_distance = None
        result: List[Any] = []

        # closest interval downstream: smallest start past the position
        right = int(np.searchsorted(self.starts, position, side='right'))
        if right < len(self):
            best_distance = int(self.starts[right]) - position
            i = right
            while i < len(self) and self.starts[i] == self.starts[right]:
                result.append(self.payloads[i])
                i += 1

        # closest interval upstream: largest end before the position
        left = int(np.searchsorted(self.sorted_ends, position, side='left')) - 1
        if left >= 0:
            distance = position - int(self.sorted_ends[left])
            upstream = []
            i = left
            while i >= 0 and self.sorted_ends[i] == self.sorted_ends[left]:
                upstream.append(self.payloads[self.end_order[i]])
                i -= 1
            upstream.reverse()
            if best_distance is None or distance < best_distance:
                best_distance = distance
                result = upstream
            elif distance == best_distance:
                result = upstream + result
        return best_distance, result


class IntervalIndex:
    """
    Static index of stranded genomic intervals supporting overlap and nearest neighbour queries.

    The intervals are grouped by (chromosome, strand) and sorted by start. Queries binary search
    the candidate window and then confirm each candidate, so a query costs O(log n + k) rather
    than a scan of the full interval set

    Example:
        >>> index = IntervalIndex([('chr1', 10, 20, '+', 'a'), ('chr1', 15, 30, '+', 'b')])
        >>> index.overlapping('chr1', '+', 18, 18)
        ['a', 'b']
        >>> index.overlapping('chr1', '-', 18, 18)
        []
    """

    def __init__(self, intervals: Iterable[Tuple[str, int, int, str, Any]]):
        """
        Args:
            intervals: tuples of chromosome, start, end, strand and payload
        """
        grouped: Dict[Tuple[str, str], List[Tuple[int, int, Any]]] = {}
        for chrom, start, end, strand, payload in intervals:
            start, end = int(start), int(end)
            if start > end:
                raise AttributeError('interval start > end is not allowed', chrom, start, end)
            grouped.setdefault((chrom, strand), []).append((start, end, payload))
        self._groups = {key: _IndexGroup(entries) for key, entries in grouped.items()}

    def __len__(self):
        return sum([len(g) for g in self._groups.values()])

    def keys(self) -> List[Hashable]:
        """the (chromosome, strand) groups that hold at least one interval"""
        return list(self._groups.keys())

    def overlapping(self, chrom: str, strand: str, start: int, end: Optional[int] = None) -> List[Any]:
        """
        payloads of all intervals on the same chromosome and strand overlapping the query, in
        order of interval start
        """
        end = start if end is None else end
        group = self._groups.get((chrom, strand))
        if group is None:
            return []
        return group.overlapping(int(start), int(end))

    def nearest(self, chrom: str, strand: str, position: int) -> Optional[Tuple[int, List[Any]]]:
        """
        distance from the position to the closest interval(s) on the same chromosome and strand
        and the payloads of those intervals

        Returns:
            None if there are no intervals on this chromosome and strand
        """
        group = self._groups.get((chrom, strand))
        if group is None or not len(group):
            return None
        return group.nearest(int(position))
