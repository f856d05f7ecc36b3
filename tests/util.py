import os

J1 = 'chr1_100_+:chr2_500_+'
J2 = 'chr1_103_+:chr2_495_+'
J3 = 'chr3_1050_-:chr4_20_+'
J3_SWAPPED = 'chr4_20_+:chr3_1050_-'
NO_GENE = 'chr5_10_+:chr5_90_+'
UNKNOWN = 'chr1_NA_+:chr2_500_+'

GTF_ROWS = [
    ['chr1', 'test', 'gene', 100, 400, '.', '+', '.', 'gene_id "G1"; gene_name "GENEA";'],
    ['chr1', 'test', 'exon', 100, 200, '.', '+', '.', 'gene_id "G1"; transcript_id "T1"; gene_name "GENEA";'],
    ['chr1', 'test', 'exon', 300, 400, '.', '+', '.', 'gene_id "G1"; transcript_id "T1"; gene_name "GENEA";'],
    ['chr1', 'test', 'exon', 150, 180, '.', '+', '.', 'gene_id "G5"; transcript_id "T5";'],
    ['chr2', 'test', 'exon', 450, 600, '.', '+', '.', 'transcript_id "T2"; gene_id "G2"; gene_name "GENEB";'],
    ['chr2', 'test', 'exon', 450, 600, '.', '+', '.', 'gene_id "G2"; transcript_id "T2b"; gene_name "OTHER";'],
    ['chr3', 'test', 'exon', 1000, 1100, '.', '-', '.', 'gene_id "G3"; transcript_id "T3"; gene_name "GENEC";'],
    ['chr4', 'test', 'exon', 10, 50, '.', '+', '.', 'gene_id "G4"; transcript_id "T4"; gene_name "GENED";'],
    ['chr1', 'test', 'exon', 500, 600, '.', '.', '.', 'gene_id "G6"; transcript_id "T6";'],
    ['chr1', 'test', 'exon', 700, 800, '.', '+', '.', 'transcript_id "T7";'],
]


def write_gtf(filename, rows=GTF_ROWS, comments=('#!genome-build test',)):
    with open(filename, 'w') as fh:
        for comment in comments:
            fh.write(comment + '\n')
        for row in rows:
            fh.write('\t'.join([str(c) for c in row]) + '\n')
    return str(filename)


def write_junctions(filename, junction_ids, header='juncid\tsupport'):
    with open(filename, 'w') as fh:
        if header is not None:
            fh.write(header + '\n')
        for i, junction_id in enumerate(junction_ids):
            fh.write(f'{junction_id}\t{i + 1}\n')
    return str(filename)


def read_rows(filename):
    """the tab-delimited rows of an output file, header included"""
    with open(filename, 'r') as fh:
        return [line.rstrip('\n').split('\t') for line in fh.readlines()]


def output_files(dirname):
    return sorted(os.listdir(dirname))
