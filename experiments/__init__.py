"""
Experiment scripts for ridgematch.

exp_minutiae_matching.py - skeleton minutiae verification of single
pairs or CSV pair lists.

Running Experiments:
-------------------
From the project root:

    python experiments/exp_minutiae_matching.py --image_a a.png --image_b b.png
    python experiments/exp_minutiae_matching.py --pairs data/pairs.csv --workers 4
    python experiments/exp_minutiae_matching.py --config configs/default.yaml
"""
