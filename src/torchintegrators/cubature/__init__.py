"""
Multi-dimensional integration driven by SciPy.

Adaptive cubature:
    Cubature

Quasi Monte Carlo:
    QMCQuad

Utilities:
    BatchIntegrand, probe_point
"""

from torchintegrators.cubature._batch import BatchIntegrand, probe_point
from torchintegrators.cubature._cubature import CUBATURE_RULES, Cubature
from torchintegrators.cubature._qmc import QMC_ENGINES, QMCQuad

__all__ = [
    # Integrators
    "CUBATURE_RULES",
    "Cubature",
    "QMC_ENGINES",
    "QMCQuad",
    # Utilities
    "BatchIntegrand",
    "probe_point",
]
