import os
import time
from typing import Dict, List, Optional

from ..annotate.attribution import GeneAttribution, attribute_junctions, compare_gene_pairs
from ..annotate.file_io import load_annotations
from ..annotate.genomic import Annotation
from ..config import validate_config
from ..constants import COLUMNS, JUNCTION_ID_DELIM, LIST_DELIM, NO_CANDIDATE
from ..junction import GenePair, JunctionCollection
from ..matching import CandidateRanking, exact_common, find_close_matches, rank_candidates
from ..util import (
    logger,
    mkdirp,
    output_list_file,
    output_tabbed_file,
    read_junction_ids,
)
from .metrics import (
    DistanceDistribution,
    GenePairDistance,
    distance_distribution,
    gene_level_metrics,
    gene_pair_distances,
    junction_level_metrics,
    summary_rows,
)


class BenchmarkResult:
    """
    everything computed while comparing the predicted junctions to the reference junctions
    """

    def __init__(
        self,
        ref: JunctionCollection,
        pred: JunctionCollection,
        common: List[str],
        close_matches: Dict[str, List[str]],
        pred_rankings: Dict[str, CandidateRanking],
        ref_genes: GeneAttribution,
        pred_genes: GeneAttribution,
        gene_pair_key: str,
        same_order: List[GenePair],
        swapped_order: List[GenePair],
        common_rankings: Dict[str, CandidateRanking],
        pair_distances: List[GenePairDistance],
        annotation_skipped: int = 0,
    ):
        self.ref = ref
        self.pred = pred
        self.common = common
        self.close_matches = close_matches
        self.pred_rankings = pred_rankings
        self.ref_genes = ref_genes
        self.pred_genes = pred_genes
        self.gene_pair_key = gene_pair_key
        self.same_order = same_order
        self.swapped_order = swapped_order
        self.common_rankings = common_rankings
        self.pair_distances = pair_distances
        self.annotation_skipped = annotation_skipped

    @property
    def distribution(self) -> DistanceDistribution:
        return distance_distribution(self.pair_distances)

    def summary(self) -> Dict:
        """the summary values by key, rates are None when undefined"""
        result = junction_level_metrics(
            self.ref, self.pred, self.common, self.close_matches, self.pred_rankings
        )
        result.update(
            gene_level_metrics(
                self.ref_genes.gene_pairs(self.gene_pair_key),
                self.pred_genes.gene_pairs(self.gene_pair_key),
                self.same_order,
                self.swapped_order,
            )
        )
        result['sum_don_acc_dist'] = str(self.distribution)
        result['ref_no_gene'] = len(self.ref_genes.no_gene)
        result['pred_no_gene'] = len(self.pred_genes.no_gene)
        result['attribution_errors'] = len(self.ref_genes.errors) + len(self.pred_genes.errors)
        result['annotation_skipped'] = self.annotation_skipped
        return result


def evaluate(
    ref: JunctionCollection,
    pred: JunctionCollection,
    annotation: Annotation,
    tolerance: int,
    gene_pair_key: str,
) -> BenchmarkResult:
    """
    compare the predictions to the reference at the junction level and then at the gene level
    """
    common = exact_common(ref, pred)
    logger.info(f'{len(common)} junctions in common ({len(ref)} reference, {len(pred)} predicted)')
    close_matches = find_close_matches(ref, pred, tolerance)
    pred_rankings = rank_candidates(pred, ref)

    ref_genes = attribute_junctions(ref, annotation)
    pred_genes = attribute_junctions(pred, annotation)
    ref_pairs = ref_genes.gene_pairs(gene_pair_key)
    pred_pairs = pred_genes.gene_pairs(gene_pair_key)
    same_order, swapped_order = compare_gene_pairs(ref_pairs.values(), pred_pairs.values())
    logger.info(
        f'{len(same_order)} gene pairs in common, {len(swapped_order)} more only predicted in the swapped order'
    )
    common_rankings, pair_distances = gene_pair_distances(
        same_order, ref, pred, ref_pairs, pred_pairs
    )
    return BenchmarkResult(
        ref,
        pred,
        common,
        close_matches,
        pred_rankings,
        ref_genes,
        pred_genes,
        gene_pair_key,
        same_order,
        swapped_order,
        common_rankings,
        pair_distances,
        annotation_skipped=annotation.skipped,
    )


def ranking_row(ranking: CandidateRanking, target_column: str, best_column: str) -> Dict:
    """
    a single output row for the ranking of a query junction. The values of the candidates are
    comma delimited in the same order, columns are '.' when there is no candidate
    """
    row = {COLUMNS.junction_id: ranking.query_id}
    if not ranking.has_candidates:
        for col in [
            target_column,
            COLUMNS.donor_distance,
            COLUMNS.acceptor_distance,
            COLUMNS.sum_distance,
            COLUMNS.best_distance,
            best_column,
        ]:
            row[col] = NO_CANDIDATE
        return row
    candidates = ranking.candidates
    row[target_column] = LIST_DELIM.join([c.target_id for c in candidates])
    row[COLUMNS.donor_distance] = LIST_DELIM.join([str(c.donor_distance) for c in candidates])
    row[COLUMNS.acceptor_distance] = LIST_DELIM.join([str(c.acceptor_distance) for c in candidates])
    row[COLUMNS.sum_distance] = LIST_DELIM.join([str(c.sum_distance) for c in candidates])
    row[COLUMNS.best_distance] = str(ranking.best_distance)
    row[best_column] = LIST_DELIM.join(ranking.best_ids)
    return row


def gene_rows(attribution: GeneAttribution) -> List[Dict]:
    rows = []
    for junction_id, genes in attribution.attributed.items():
        rows.append(
            {
                COLUMNS.junction_id: junction_id,
                COLUMNS.donor_gene_id: genes.donor_gene.gene_id,
                COLUMNS.acceptor_gene_id: genes.acceptor_gene.gene_id,
                COLUMNS.donor_gene_name: genes.donor_gene.gene_name or NO_CANDIDATE,
                COLUMNS.acceptor_gene_name: genes.acceptor_gene.gene_name or NO_CANDIDATE,
            }
        )
    return rows


def excluded_rows(attribution: GeneAttribution, source: str) -> List[Dict]:
    rows = []
    for excluded in attribution.excluded:
        rows.append(
            {
                COLUMNS.junction_id: excluded.junction_id,
                COLUMNS.source: source,
                COLUMNS.side: excluded.side if excluded.side else NO_CANDIDATE,
                COLUMNS.reason: excluded.reason,
                COLUMNS.nearest_exon_distance: NO_CANDIDATE
                if excluded.nearest_distance is None
                else excluded.nearest_distance,
            }
        )
    return rows


def write_outputs(result: BenchmarkResult, output: str, write_intermediate: bool = True):
    """
    write the summary and (optionally) the per junction and per gene pair tables to the output directory
    """
    rows = summary_rows(result.summary())
    output_list_file(rows, os.path.join(output, 'summary.tsv'))
    if not write_intermediate:
        return

    output_list_file(result.common, os.path.join(output, 'common.txt'))
    output_tabbed_file(
        [
            {COLUMNS.ref_junction: ref_id, COLUMNS.close_junctions: LIST_DELIM.join(pred_ids)}
            for ref_id, pred_ids in result.close_matches.items()
        ],
        os.path.join(output, 'refjunc_closepred.tsv'),
        header=[COLUMNS.ref_junction, COLUMNS.close_junctions],
    )
    output_tabbed_file(
        [
            ranking_row(ranking, COLUMNS.ref_junction, COLUMNS.best_ref)
            for ranking in result.pred_rankings.values()
        ],
        os.path.join(output, 'pred_vs_ref.tsv'),
        header=[
            COLUMNS.junction_id,
            COLUMNS.ref_junction,
            COLUMNS.donor_distance,
            COLUMNS.acceptor_distance,
            COLUMNS.sum_distance,
            COLUMNS.best_distance,
            COLUMNS.best_ref,
        ],
    )
    gene_header = [
        COLUMNS.junction_id,
        COLUMNS.donor_gene_id,
        COLUMNS.acceptor_gene_id,
        COLUMNS.donor_gene_name,
        COLUMNS.acceptor_gene_name,
    ]
    output_tabbed_file(
        gene_rows(result.ref_genes), os.path.join(output, 'ref_gnid_gnname.tsv'), header=gene_header
    )
    output_tabbed_file(
        gene_rows(result.pred_genes), os.path.join(output, 'pred_gnid_gnname.tsv'), header=gene_header
    )

    ref_pairs = result.ref_genes.gene_pairs(result.gene_pair_key)
    common_rows = []
    for junction_id, ranking in result.common_rankings.items():
        row = ranking_row(ranking, COLUMNS.pred_junction, COLUMNS.best_junction)
        row[COLUMNS.gene_pair] = str(ref_pairs[junction_id])
        common_rows.append(row)
    output_tabbed_file(
        common_rows,
        os.path.join(output, 'ref_junc_belonging_to_common_gnpairs_vs_pred_same.tsv'),
        header=[
            COLUMNS.junction_id,
            COLUMNS.gene_pair,
            COLUMNS.pred_junction,
            COLUMNS.donor_distance,
            COLUMNS.acceptor_distance,
            COLUMNS.sum_distance,
            COLUMNS.best_distance,
            COLUMNS.best_junction,
        ],
    )
    output_tabbed_file(
        [
            {
                COLUMNS.donor_gene: d.gene_pair.donor_gene,
                COLUMNS.acceptor_gene: d.gene_pair.acceptor_gene,
                COLUMNS.best_junction: d.best_junction if d.best_junction else NO_CANDIDATE,
                COLUMNS.best_distance: NO_CANDIDATE if d.best_distance is None else d.best_distance,
            }
            for d in result.pair_distances
        ],
        os.path.join(output, 'dongn_accgn_bestjunc_bestdist.tsv'),
        header=[
            COLUMNS.donor_gene,
            COLUMNS.acceptor_gene,
            COLUMNS.best_junction,
            COLUMNS.best_distance,
        ],
    )
    output_tabbed_file(
        excluded_rows(result.ref_genes, 'ref') + excluded_rows(result.pred_genes, 'pred'),
        os.path.join(output, 'excluded_from_gene_level.tsv'),
        header=[
            COLUMNS.junction_id,
            COLUMNS.source,
            COLUMNS.side,
            COLUMNS.reason,
            COLUMNS.nearest_exon_distance,
        ],
    )


def main(
    reference: str,
    predicted: str,
    annotations: List[str],
    output: str,
    config: Optional[Dict] = None,
    start_time=int(time.time()),
) -> Dict:
    """
    Args:
        reference: path to the reference junctions
        predicted: path to the predicted junctions
        annotations: paths to the GTF/GFF2 annotation files
        output: path to the output directory
        config: the validated settings (defaults are used for the missing ones)

    Returns:
        the summary values by key
    """
    config = validate_config(config)
    mkdirp(output)

    ref = JunctionCollection(read_junction_ids(reference))
    pred = JunctionCollection(read_junction_ids(predicted))
    for name, collection in [('reference', ref), ('predicted', pred)]:
        if collection.discarded:
            logger.warning(
                f'ignored {len(collection.discarded)} {name} ids which are not junctions (no "{JUNCTION_ID_DELIM}")'
            )
        if collection.invalid:
            logger.warning(
                f'{len(collection.invalid)} {name} junctions have unknown coordinates and are only '
                'used for exact matching'
            )
    annotation = load_annotations(*annotations)

    result = evaluate(ref, pred, annotation, config['tolerance'], config['gene_pair_key'])
    write_outputs(result, output, write_intermediate=config['write_intermediate'])
    logger.info(f'benchmark complete after {int(time.time()) - start_time}s')
    return result.summary()
