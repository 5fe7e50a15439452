from quadint.cache import LRUCache, ResultsCache
from quadint.config import FormatOptions, Settings, load_settings
from quadint.errors import AlgebraicDegreeOverflowError, NonEuclideanDomainError, NotDivisibleError
from quadint.grouping import ResultsGrouping
from quadint.ideal import Ideal
from quadint.ntheory import Splitting
from quadint.quad import QuadraticFactorization, quadint
from quadint.ring import QuadraticRing

__all__ = [
    "AlgebraicDegreeOverflowError",
    "FormatOptions",
    "Ideal",
    "LRUCache",
    "NonEuclideanDomainError",
    "NotDivisibleError",
    "QuadraticFactorization",
    "QuadraticRing",
    "ResultsCache",
    "ResultsGrouping",
    "Settings",
    "Splitting",
    "load_settings",
    "quadint",
]
