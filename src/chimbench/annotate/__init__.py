"""
Sub-package Documentation
==========================

Gene annotation of the junction breakpoints.

Algorithm Overview
----------------------

- read the exon rows of a GTF/GFF2 annotation (rows missing a gene_id or transcript_id are skipped)
- count the exon records of every gene and keep the first name seen for each gene id
- index the exons by chromosome and strand
- for each breakpoint, collect the genes of the exons overlapping its position and keep the one
  with the most exons (first seen wins ties)
- pair the genes of the donor and acceptor breakpoints of each junction

Junctions where either breakpoint overlaps no exon are excluded from the gene level evaluation.
"""
