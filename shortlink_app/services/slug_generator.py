"""
Slug generation strategies.
Uses Strategy Pattern so the service can be given a deterministic generator in tests.
"""

import secrets
import string
from abc import ABC, abstractmethod

SLUG_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
DEFAULT_SLUG_LENGTH = 8


class SlugGenerator(ABC):
    """Abstract base class for slug generators"""
    
    @abstractmethod
    def generate(self) -> str:
        """
        Produce a candidate slug.
        
        Candidates are not guaranteed to be free; the caller checks them.
        """
        pass


class RandomSlugGenerator(SlugGenerator):
    """
    Fixed-length slug with each character drawn uniformly from [A-Za-z0-9].
    
    62^8 (~2.2e14) possible slugs at the default length, so collisions are
    rare but still possible and must be checked for.
    """
    
    def __init__(self, length: int = DEFAULT_SLUG_LENGTH, alphabet: str = SLUG_ALPHABET):
        if length < 1:
            raise ValueError(f"Slug length must be positive, got {length}")
        self.length = length
        self.alphabet = alphabet
    
    def generate(self) -> str:
        return ''.join(secrets.choice(self.alphabet) for _ in range(self.length))
