"""HTTP service for the NeuralPay task envelope proxy."""

from neuralpay_gateway import __version__

__all__ = ["__version__"]
