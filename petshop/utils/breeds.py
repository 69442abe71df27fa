"""
Dog breed registry lookup (dog.ceo)
"""
import logging
from abc import ABC, abstractmethod

import httpx

logger = logging.getLogger(__name__)


def normalize_breed(name):
    return (name or '').strip().lower()


class BreedValidator(ABC):
    """Anything with ``is_known_breed(name) -> bool`` can be injected into the app."""

    @abstractmethod
    def is_known_breed(self, name):
        """Return True when ``name`` is a breed the registry knows."""


class DogCeoBreedValidator(BreedValidator):
    def __init__(self, url='https://dog.ceo/api/breeds/list/all', timeout=5.0, client=None):
        self.url = url
        self.timeout = timeout
        self._client = client

    def _fetch_breeds(self):
        if self._client is not None:
            response = self._client.get(self.url, timeout=self.timeout)
        else:
            response = httpx.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        # {"message": {"labrador": [], "bulldog": ["boston", ...]}, "status": "success"}
        return response.json()['message']

    def is_known_breed(self, name):
        """
        Check a breed name against the registry.

        The lookup is best effort: a network, HTTP or payload error counts as
        "breed unknown" instead of bubbling up as a server error.
        """
        breed = normalize_breed(name)
        if not breed:
            return False
        try:
            breeds = self._fetch_breeds()
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Breed registry lookup failed for '{breed}': {e}")
            return False
        return breed in breeds
