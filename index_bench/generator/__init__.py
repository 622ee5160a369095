"""
Generator package: sampling functions and the data generator that fills
every schema variant with the same synthetic sessions.
"""

from index_bench.generator import distributions
from index_bench.generator.data_generator import DataGenerator, utc_now

__all__ = ["DataGenerator", "distributions", "utc_now"]
