class ChimBenchError(Exception):
    """
    base class for the recoverable, record level problems raised while benchmarking
    """

    pass


class MalformedJunctionError(ChimBenchError):
    """
    raised when a junction id contains an unknown coordinate or does not follow
    the ``chr_pos_strand:chr_pos_strand`` pattern
    """

    pass


class EmptyInputError(ChimBenchError):
    """
    raised when a rate is requested over an empty set (ex. precision with no predictions)
    """

    pass


class MissingAnnotationFieldError(ChimBenchError):
    """
    raised when an exon record lacks its gene_id or transcript_id
    """

    pass


class NoGeneOverlapError(ChimBenchError):
    """
    raised when a breakpoint does not overlap any annotated exon. This is an expected
    outcome for non-exonic junctions and not a computation error
    """

    def __init__(self, breakpoint, nearest_distance=None, side=None):
        ChimBenchError.__init__(self, 'breakpoint does not overlap any exon', breakpoint)
        self.breakpoint = breakpoint
        self.side = side
        self.nearest_distance = nearest_distance
