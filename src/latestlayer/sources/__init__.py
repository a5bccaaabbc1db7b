"""
Layer version sources.
"""

from latestlayer.sources.lambda_api import LambdaLayerVersionSource
from latestlayer.sources.memory import InMemoryLayerVersionSource

__all__ = [
    "LambdaLayerVersionSource",
    "InMemoryLayerVersionSource",
]
