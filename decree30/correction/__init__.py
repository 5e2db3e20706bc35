from decree30.correction.base import BaseCorrector
from decree30.correction.corrector import Corrector
from decree30.correction.factory import CorrectorFactory

__all__ = ["BaseCorrector", "Corrector", "CorrectorFactory"]
