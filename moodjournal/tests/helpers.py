"""
Test doubles for image providers.
"""
import random
from moodjournal.services.image_service import (
    ImageProvider, ImageProviderChain, ImageProviderError, PlaceholderImageProvider
)


class StubProvider(ImageProvider):
    """Provider returning a fixed URL or raising a fixed error."""

    def __init__(self, name, image_url=None, error=None):
        super().__init__()
        self.name = name
        self.image_url = image_url
        self.error = error
        self.calls = []

    async def try_generate(self, prompt):
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.image_url


def failing_provider(name):
    return StubProvider(name, error=ImageProviderError(f"{name} is down"))


def make_chain(*providers, seed=7):
    return ImageProviderChain(list(providers), placeholder=PlaceholderImageProvider(rng=random.Random(seed)))
