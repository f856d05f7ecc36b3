import pytest
from chimbench.annotate.attribution import (
    attribute_junctions,
    best_gene,
    compare_gene_pairs,
    overlapping_genes,
)
from chimbench.annotate.file_io import load_annotations, parse_gtf_attributes
from chimbench.annotate.genomic import Annotation, ExonInterval, GeneRecord, build_gene_records
from chimbench.constants import GENE_PAIR_KEY, SIDE
from chimbench.error import MissingAnnotationFieldError, NoGeneOverlapError
from chimbench.junction import Breakpoint, GenePair, JunctionCollection

from ..util import J1, J2, J3, NO_GENE, UNKNOWN, write_gtf


@pytest.fixture
def annotation(tmp_path):
    return load_annotations(write_gtf(tmp_path / 'annotation.gtf'))


class TestParseGtfAttributes:
    def test_quoted(self):
        assert parse_gtf_attributes('gene_id "G1"; transcript_id "T1"; exon_number 2;') == {
            'gene_id': 'G1',
            'transcript_id': 'T1',
            'exon_number': '2',
        }

    def test_first_value_kept(self):
        assert parse_gtf_attributes('tag "a"; tag "b";') == {'tag': 'a'}

    def test_empty(self):
        assert parse_gtf_attributes('') == {}


class TestLoadAnnotations:
    def test_exons(self, annotation):
        assert len(annotation) == 7
        assert annotation.skipped == 2
        assert sorted(annotation.genes.keys()) == ['G1', 'G2', 'G3', 'G4', 'G5']

    def test_exon_counts(self, annotation):
        assert annotation.gene('G1').exon_count == 2
        assert annotation.gene('G2').exon_count == 2
        assert annotation.gene('G5').exon_count == 1

    def test_first_gene_name_kept(self, annotation):
        assert annotation.gene('G2').gene_name == 'GENEB'

    def test_gene_without_name(self, annotation):
        assert annotation.gene('G5').gene_name == ''
        assert annotation.gene('G5').label == 'G5'

    def test_multiple_files(self, tmp_path):
        first = write_gtf(tmp_path / 'first.gtf')
        second = write_gtf(
            tmp_path / 'second.gtf',
            rows=[['chr9', 'test', 'exon', 1, 10, '.', '-', '.', 'gene_id "G9"; transcript_id "T9";']],
            comments=[],
        )
        annotation = load_annotations(first, second)
        assert len(annotation) == 8
        assert annotation.gene('G9').exon_count == 1

    def test_empty_file(self, tmp_path):
        filename = tmp_path / 'empty.gtf'
        filename.write_text('')
        annotation = load_annotations(str(filename))
        assert len(annotation) == 0
        assert annotation.genes == {}

    def test_hash_inside_attributes(self, tmp_path):
        filename = write_gtf(
            tmp_path / 'hash.gtf',
            rows=[
                [
                    'chr9',
                    'test',
                    'exon',
                    1,
                    10,
                    '.',
                    '+',
                    '.',
                    'gene_id "G9"; transcript_id "T9"; gene_name "A#B";',
                ]
            ],
            comments=['#!genome-build test', '##description: "commented"\tline'],
        )
        annotation = load_annotations(filename)
        assert len(annotation) == 1
        assert annotation.skipped == 0
        assert annotation.gene('G9').gene_name == 'A#B'

    def test_comments_only(self, tmp_path):
        annotation = load_annotations(write_gtf(tmp_path / 'comments.gtf', rows=[]))
        assert len(annotation) == 0


class TestExonInterval:
    def test_missing_gene_id_error(self):
        with pytest.raises(MissingAnnotationFieldError):
            ExonInterval('chr1', 1, 10, '+', gene_id=None, transcript_id='T1')

    def test_missing_transcript_id_error(self):
        with pytest.raises(MissingAnnotationFieldError):
            ExonInterval('chr1', 1, 10, '+', gene_id='G1', transcript_id='')

    def test_start_after_end_error(self):
        with pytest.raises(AttributeError):
            ExonInterval('chr1', 10, 1, '+', gene_id='G1', transcript_id='T1')


class TestBuildGeneRecords:
    def test_names_of_unknown_genes_ignored(self):
        exons = [ExonInterval('chr1', 1, 10, '+', 'G1', 'T1')]
        genes = build_gene_records(exons, [('G2', 'B'), ('G1', 'A'), ('G1', 'Z')])
        assert list(genes.keys()) == ['G1']
        assert genes['G1'].gene_name == 'A'


class TestBestGene:
    def test_single_gene(self, annotation):
        assert best_gene(Breakpoint('chr2', 500, '+'), annotation).gene_id == 'G2'

    def test_most_exons_wins(self, annotation):
        bp = Breakpoint('chr1', 160, '+')
        assert overlapping_genes(bp, annotation) == ['G1', 'G5']
        assert best_gene(bp, annotation).gene_id == 'G1'

    def test_first_seen_wins_ties(self):
        exons = [
            ExonInterval('chr1', 1, 100, '+', 'A', 'TA'),
            ExonInterval('chr1', 50, 150, '+', 'B', 'TB'),
        ]
        annotation = Annotation(exons)
        assert best_gene(Breakpoint('chr1', 75, '+'), annotation).gene_id == 'A'

    def test_strand_specific(self, annotation):
        with pytest.raises(NoGeneOverlapError):
            best_gene(Breakpoint('chr2', 500, '-'), annotation)

    def test_no_overlap_reports_nearest_exon(self, annotation):
        with pytest.raises(NoGeneOverlapError) as err:
            best_gene(Breakpoint('chr1', 250, '+'), annotation)
        assert err.value.nearest_distance == 50

    def test_no_exon_on_chromosome(self, annotation):
        with pytest.raises(NoGeneOverlapError) as err:
            best_gene(Breakpoint('chr5', 10, '+'), annotation)
        assert err.value.nearest_distance is None


class TestAttributeJunctions:
    def test_attributed(self, annotation):
        result = attribute_junctions(JunctionCollection([J1, J2, J3]), annotation)
        assert list(result.attributed.keys()) == [J1, J2, J3]
        assert result.excluded == []
        pairs = result.gene_pairs(GENE_PAIR_KEY.NAME)
        assert pairs[J1] == GenePair('GENEA', 'GENEB')
        assert pairs[J3] == GenePair('GENEC', 'GENED')

    def test_gene_pair_by_id(self, annotation):
        result = attribute_junctions(JunctionCollection([J1]), annotation)
        assert result.gene_pairs(GENE_PAIR_KEY.ID)[J1] == GenePair('G1', 'G2')

    def test_no_gene_excluded(self, annotation):
        result = attribute_junctions(JunctionCollection([J1, NO_GENE, UNKNOWN]), annotation)
        assert list(result.attributed.keys()) == [J1]
        assert [e.junction_id for e in result.no_gene] == [NO_GENE]
        assert result.no_gene[0].side == SIDE.DONOR
        assert result.errors == []

    def test_acceptor_side_reported(self, annotation):
        junction_id = 'chr1_100_+:chr9_1_+'
        result = attribute_junctions(JunctionCollection([junction_id]), annotation)
        assert result.no_gene[0].side == SIDE.ACCEPTOR

    def test_error_isolated(self):
        exons = [ExonInterval('chr1', 1, 1000, '+', 'G1', 'T1')]
        annotation = Annotation(exons, genes={})
        other = 'chr2_1_+:chr2_10_+'
        result = attribute_junctions(JunctionCollection(['chr1_10_+:chr1_20_+', other]), annotation)
        assert result.attributed == {}
        assert len(result.errors) == 1
        assert result.errors[0].is_error
        assert [e.junction_id for e in result.no_gene] == [other]


class TestCompareGenePairs:
    def test_swapped_order_of_common_pair_not_counted(self):
        same, swapped = compare_gene_pairs(
            [GenePair('A', 'B'), GenePair('C', 'D')], [GenePair('A', 'B'), GenePair('B', 'A')]
        )
        assert same == [GenePair('A', 'B')]
        assert swapped == []

    def test_swapped_order(self):
        same, swapped = compare_gene_pairs(
            [GenePair('A', 'B'), GenePair('C', 'D')], [GenePair('D', 'C')]
        )
        assert same == []
        assert swapped == [GenePair('C', 'D')]

    def test_duplicates_counted_once(self):
        same, swapped = compare_gene_pairs(
            [GenePair('A', 'B'), GenePair('A', 'B')], [GenePair('A', 'B'), GenePair('A', 'B')]
        )
        assert same == [GenePair('A', 'B')]

    def test_gene_record_label(self):
        assert GeneRecord('G1', 'NAME').label == 'NAME'
        assert GeneRecord('G1').label == 'G1'
