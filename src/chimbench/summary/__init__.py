"""
Sub-package Documentation
============================

This is the package responsible for comparing the predicted junctions to the reference junctions
and reporting the sensitivity and precision of the predictions.

Output Files
--------------

+--------------------------------------------------------+------------------+------------------------------------------------------------+
| expected name/suffix                                   | file type/format | content                                                    |
+========================================================+==================+============================================================+
| ``summary.tsv``                                        | text/tabbed      | the summary report (also printed to stdout)                |
+--------------------------------------------------------+------------------+------------------------------------------------------------+
| ``common.txt``                                         | text             | the junctions found exactly in both sets                   |
+--------------------------------------------------------+------------------+------------------------------------------------------------+
| ``refjunc_closepred.tsv``                              | text/tabbed      | reference junctions and their close (non-exact) predictions|
+--------------------------------------------------------+------------------+------------------------------------------------------------+
| ``pred_vs_ref.tsv``                                    | text/tabbed      | every predicted junction vs the reference junctions on the |
|                                                        |                  | same chromosomes and strands                               |
+--------------------------------------------------------+------------------+------------------------------------------------------------+
| ``ref_gnid_gnname.tsv``, ``pred_gnid_gnname.tsv``      | text/tabbed      | genes attributed to each junction                          |
+--------------------------------------------------------+------------------+------------------------------------------------------------+
| ``ref_junc_belonging_to_common_gnpairs_vs_pred_same``  | text/tabbed      | reference vs predicted junctions of the common gene pairs  |
| ``.tsv``                                               |                  |                                                            |
+--------------------------------------------------------+------------------+------------------------------------------------------------+
| ``dongn_accgn_bestjunc_bestdist.tsv``                  | text/tabbed      | closest predicted junction of each common gene pair        |
+--------------------------------------------------------+------------------+------------------------------------------------------------+
| ``excluded_from_gene_level.tsv``                       | text/tabbed      | junctions left out of the gene level evaluation and why    |
+--------------------------------------------------------+------------------+------------------------------------------------------------+

Algorithm Overview
---------------------

- exact comparison of the junction ids
- close matches: both breakpoints within the tolerance window of a prediction
- ranking of the reference junctions on the same chromosomes and strands for every prediction
- gene attribution of each junction and comparison of the gene pairs (same and swapped order)
- distribution of the best donor+acceptor distance of the common gene pairs
"""
