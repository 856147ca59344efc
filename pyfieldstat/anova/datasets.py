"""
Example datasets for the three supported designs.

Rows are treatments (genotypes), columns are replications. These are the
worked examples offered by the data-entry screen of the ANOVA tool.
"""

import numpy as np

from pyfieldstat.anova.design import normalize_design

# Completely randomized design: 4 treatments x 3 replications
crd_example = np.array([
    [12.5, 13.2, 14.1],
    [11.8, 12.4, 13.0],
    [14.2, 14.8, 15.3],
    [13.5, 13.9, 14.5],
])

# Randomized block design: 4 treatments x 4 blocks
rbd_example = np.array([
    [10.2, 10.5, 10.8, 11.1],
    [12.3, 12.6, 12.9, 13.2],
    [11.8, 12.1, 12.4, 12.7],
    [13.5, 13.8, 14.1, 14.4],
])

# Latin square design: 3 treatments x 3 rows
lsd_example = np.array([
    [10.2, 11.5, 12.1],
    [11.8, 12.3, 10.5],
    [12.4, 10.8, 11.2],
])

EXAMPLES = {
    'CRD': crd_example,
    'RBD': rbd_example,
    'LSD': lsd_example,
}


def load_example(design: str) -> np.ndarray:
    """
    Return a copy of the example matrix for 'CRD', 'RBD' or 'LSD'.

    Raises:
        ValidationError: If design is not a supported design name
    """
    return EXAMPLES[normalize_design(design)].copy()
