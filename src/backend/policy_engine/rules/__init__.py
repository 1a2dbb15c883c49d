from .max_length import MaxLengthPolicy
from .min_length import MinLengthPolicy
from .only_alphanumeric import OnlyAlphanumericCharacters

__all__ = [
    "MaxLengthPolicy",
    "MinLengthPolicy",
    "OnlyAlphanumericCharacters",
]
