"""
module which holds all functions relating to loading the reference annotation
"""
import re
from typing import Dict, List, Tuple

import pandas as pd

from ..constants import STRAND
from ..error import MissingAnnotationFieldError
from ..util import logger
from .genomic import Annotation, ExonInterval, build_gene_records

GTF_COLUMNS = ['seqname', 'source', 'feature', 'start', 'end', 'score', 'strand', 'frame', 'attribute']
ATTRIBUTE_PATTERN = re.compile(r'([A-Za-z_][\w.]*)\s+(?:"([^"]*)"|([^;\s"]+))')
EXON_FEATURE = 'exon'


def parse_gtf_attributes(attributes: str) -> Dict[str, str]:
    """
    split the key/value pairs of the 9th column of a GTF/GFF2 row. Only the first value of a
    repeated key is kept

    Example:
        >>> parse_gtf_attributes('gene_id "G1"; transcript_id "T1"; exon_number 2;')
        {'gene_id': 'G1', 'transcript_id': 'T1', 'exon_number': '2'}
    """
    result: Dict[str, str] = {}
    if not attributes or pd.isnull(attributes):
        return result
    for match in ATTRIBUTE_PATTERN.finditer(attributes):
        value = match.group(2) if match.group(2) is not None else match.group(3)
        result.setdefault(match.group(1), value)
    return result


def read_gtf(filename: str) -> pd.DataFrame:
    logger.info(f'reading: {filename}')
    try:
        df = pd.read_csv(
            filename,
            sep='\t',
            dtype=str,
            index_col=False,
            header=None,
            names=GTF_COLUMNS,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        logger.warning(f'ignoring empty file: {filename}')
        return pd.DataFrame(columns=GTF_COLUMNS)
    # only lines starting with '#' are comments
    df = df[~df['seqname'].str.startswith('#')]
    return df.astype({'start': int, 'end': int})


def load_annotations(*filepaths: str) -> Annotation:
    """
    loads the exons from GTF/GFF2 files. gene_id, transcript_id and gene_name may appear anywhere
    in the attributes column.

    Exon rows without a gene_id or transcript_id, or without a defined strand, are skipped and
    counted. The gene names are taken from the first row (of any feature type) of each gene id

    Args:
        filepaths: paths to the input files

    Returns:
        the exons and gene records of all the files
    """
    exons: List[ExonInterval] = []
    names: List[Tuple[str, str]] = []
    skipped = 0

    for filename in filepaths:
        df = read_gtf(filename)
        file_exons = 0
        for row in df.itertuples(index=False):
            attrs = parse_gtf_attributes(row.attribute)
            gene_id = attrs.get('gene_id')
            if gene_id:
                names.append((gene_id, attrs.get('gene_name', '')))
            if row.feature != EXON_FEATURE:
                continue
            try:
                if row.strand not in STRAND.values():
                    raise MissingAnnotationFieldError('exon has no strand', row.seqname, row.start, row.end)
                exons.append(
                    ExonInterval(
                        row.seqname,
                        row.start,
                        row.end,
                        row.strand,
                        gene_id=gene_id,
                        transcript_id=attrs.get('transcript_id'),
                    )
                )
                file_exons += 1
            except MissingAnnotationFieldError as err:
                skipped += 1
                logger.debug(repr(err))
        logger.info(f'loaded {file_exons} exons from {filename}')

    if skipped:
        logger.warning(f'Skipped {skipped} exon rows missing a gene_id, transcript_id or strand')
    genes = build_gene_records(exons, names)
    logger.info(f'loaded {len(exons)} exons of {len(genes)} genes')
    return Annotation(exons, genes, skipped=skipped)
