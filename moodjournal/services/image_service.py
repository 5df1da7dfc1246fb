"""
Image generation service for mood illustrations.

Supports multiple text-to-image providers: Google Generative Language
(Gemini), OpenAI DALL·E and Pollinations (free). Providers are tried in the
configured order; when all of them fail a placeholder image is returned.
"""
import logging
import random
import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import quote
import httpx
from moodjournal.core.config import settings

logger = logging.getLogger(__name__)

IMAGE_URL_PATTERN = re.compile(r"https?://[^\s\"')]+\.(?:jpg|jpeg|png|gif|webp)", re.IGNORECASE)
DATA_URL_PATTERN = re.compile(r"data:image/[^;]+;base64,[A-Za-z0-9+/=]+")

PLACEHOLDER_PROVIDER_NAME = "placeholder"


class ImageProviderError(Exception):
    """Raised by a provider when it cannot produce a usable image."""


@dataclass
class ImageResult:
    """Successful image generation."""
    provider_name: str
    image_url: str
    prompt: str


class ImageProvider:
    """Base class for image provider adapters."""

    name = "provider"

    def __init__(self, timeout: float = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout if timeout is not None else settings.IMAGE_REQUEST_TIMEOUT
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def try_generate(self, prompt: str) -> str:
        """Return an image reference (URL or data URL) or raise ImageProviderError."""
        raise NotImplementedError


def describe_http_error(error: Exception) -> str:
    """Error text without the request URL, which may carry credentials."""
    if isinstance(error, httpx.HTTPStatusError):
        return f"HTTP {error.response.status_code}"
    if isinstance(error, httpx.HTTPError):
        return type(error).__name__
    return str(error)


def extract_image_url(text: str) -> Optional[str]:
    """Find a direct image URL in free text."""
    match = IMAGE_URL_PATTERN.search(text or "")
    return match.group(0) if match else None


def extract_data_url(text: str) -> Optional[str]:
    """Find an inline base64 image (data URL) in free text."""
    match = DATA_URL_PATTERN.search(text or "")
    return match.group(0) if match else None


class GeminiImageProvider(ImageProvider):
    """
    Google Generative Language API (generateContent).
    Image models answer with inline base64 parts; text models sometimes
    answer with an image URL or a data URL in the text.
    """

    def __init__(self, api_key: str, model: str, api_url: str = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.model = model
        self.api_url = api_url or settings.GEMINI_API_URL
        self.name = model

    async def try_generate(self, prompt: str) -> str:
        url = f"{self.api_url}/{self.model}:generateContent"
        request_body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
        }

        try:
            async with self._client() as client:
                response = await client.post(
                    url,
                    headers={"x-goog-api-key": self.api_key},
                    json=request_body,
                )
                response.raise_for_status()
                result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ImageProviderError(f"Gemini request failed: {describe_http_error(e)}") from e

        texts = []
        for candidate in result.get("candidates") or []:
            for part in (candidate.get("content") or {}).get("parts") or []:
                inline = part.get("inlineData") or part.get("inline_data")
                if inline and inline.get("data"):
                    mime_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
                    if mime_type.startswith("image/"):
                        return f"data:{mime_type};base64,{inline['data']}"
                if part.get("text"):
                    texts.append(part["text"])

        text = "\n".join(texts)
        image_url = extract_image_url(text)
        if image_url:
            if await validate_image_url(image_url, transport=self.transport):
                return image_url
            logger.info(f"Gemini model {self.model} linked an image that does not load: {image_url}")

        data_url = extract_data_url(text)
        if data_url:
            return data_url

        raise ImageProviderError(f"Gemini model {self.model} returned no image")


class OpenAIImageProvider(ImageProvider):
    """OpenAI Images API (DALL·E)."""

    name = "dall-e"

    def __init__(self, api_key: str, model: str = None, size: str = None, api_url: str = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.model = model or settings.OPENAI_IMAGE_MODEL
        self.size = size or settings.OPENAI_IMAGE_SIZE
        self.api_url = api_url or settings.OPENAI_IMAGES_URL
        self.name = self.model

    async def try_generate(self, prompt: str) -> str:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "prompt": prompt,
            "n": 1,
            "size": self.size,
        }

        try:
            async with self._client() as client:
                response = await client.post(self.api_url, headers=headers, json=payload)
                response.raise_for_status()
                result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ImageProviderError(f"OpenAI request failed: {describe_http_error(e)}") from e

        data = result.get("data") or []
        if data:
            if data[0].get("url"):
                return data[0]["url"]
            if data[0].get("b64_json"):
                return f"data:image/png;base64,{data[0]['b64_json']}"

        raise ImageProviderError("OpenAI response contained no image")


class PollinationsImageProvider(ImageProvider):
    """
    Pollinations free prompt-to-image service.
    The image is rendered from the URL itself, so the URL is the reference.
    """

    name = "pollinations"

    def __init__(self, api_url: str = None, width: int = 512, height: int = 512,
                 rng: Optional[random.Random] = None, **kwargs):
        super().__init__(**kwargs)
        self.api_url = api_url or settings.POLLINATIONS_API_URL
        self.width = width
        self.height = height
        self.rng = rng or random.Random()

    def build_url(self, prompt: str) -> str:
        seed = self.rng.randint(0, 999999)
        return (
            f"{self.api_url}/{quote(prompt, safe='')}"
            f"?width={self.width}&height={self.height}&seed={seed}&nologo=true"
        )

    async def try_generate(self, prompt: str) -> str:
        url = self.build_url(prompt)

        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise ImageProviderError(f"Pollinations request failed: {describe_http_error(e)}") from e

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("image/"):
            raise ImageProviderError(f"Pollinations returned {content_type or 'no content type'}")

        return url


class PlaceholderImageProvider(ImageProvider):
    """Non-AI placeholder image; never fails."""

    name = PLACEHOLDER_PROVIDER_NAME

    def __init__(self, url_template: str = None, rng: Optional[random.Random] = None):
        super().__init__()
        self.url_template = url_template or settings.PLACEHOLDER_IMAGE_URL
        self.rng = rng or random.Random()

    def image_url(self) -> str:
        return self.url_template.format(seed=self.rng.randint(0, 999))

    async def try_generate(self, prompt: str) -> str:
        return self.image_url()


class ImageProviderChain:
    """
    Ordered fallback over image providers.
    Providers run one at a time, each at most once; the placeholder answers
    when every provider failed.
    """

    def __init__(self, providers: List[ImageProvider], placeholder: Optional[PlaceholderImageProvider] = None):
        self.providers = list(providers)
        self.placeholder = placeholder or PlaceholderImageProvider()

    @property
    def provider_names(self) -> List[str]:
        return [provider.name for provider in self.providers]

    async def generate_image(self, prompt: str) -> ImageResult:
        for provider in self.providers:
            try:
                logger.info(f"Trying image provider: {provider.name}")
                image_url = await provider.try_generate(prompt)
            except ImageProviderError as e:
                logger.warning(f"Image provider {provider.name} failed: {e}")
                continue
            except Exception as e:
                logger.error(f"Unexpected error in image provider {provider.name}: {e}", exc_info=True)
                continue

            if not image_url:
                logger.warning(f"Image provider {provider.name} returned an empty reference")
                continue

            logger.info(f"Image generated with provider: {provider.name}")
            return ImageResult(provider_name=provider.name, image_url=image_url, prompt=prompt)

        logger.info("All image providers failed, using placeholder image")
        return ImageResult(
            provider_name=self.placeholder.name,
            image_url=self.placeholder.image_url(),
            prompt=prompt,
        )


def build_provider_chain(
    config=None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    rng: Optional[random.Random] = None
) -> ImageProviderChain:
    """
    Build the provider chain from settings.IMAGE_PROVIDERS.
    Providers that need an API key are skipped when the key is not configured.
    """
    config = config or settings
    timeout = config.IMAGE_REQUEST_TIMEOUT
    providers: List[ImageProvider] = []

    for provider_name in config.IMAGE_PROVIDERS:
        provider_name = provider_name.strip().lower()

        if provider_name == "gemini":
            if not config.GEMINI_API_KEY:
                logger.warning("Gemini API key not configured. Skipping Gemini image provider.")
                continue
            for model in config.GEMINI_IMAGE_MODELS:
                providers.append(GeminiImageProvider(
                    api_key=config.GEMINI_API_KEY,
                    model=model,
                    api_url=config.GEMINI_API_URL,
                    timeout=timeout,
                    transport=transport,
                ))
        elif provider_name in ("dalle", "openai"):
            if not config.OPENAI_API_KEY:
                logger.warning("OpenAI API key not configured. Skipping DALL·E image provider.")
                continue
            providers.append(OpenAIImageProvider(
                api_key=config.OPENAI_API_KEY,
                model=config.OPENAI_IMAGE_MODEL,
                size=config.OPENAI_IMAGE_SIZE,
                api_url=config.OPENAI_IMAGES_URL,
                timeout=timeout,
                transport=transport,
            ))
        elif provider_name == "pollinations":
            providers.append(PollinationsImageProvider(
                api_url=config.POLLINATIONS_API_URL,
                rng=rng,
                timeout=timeout,
                transport=transport,
            ))
        else:
            logger.warning(f"Unknown image provider '{provider_name}' in IMAGE_PROVIDERS, ignoring")

    placeholder = PlaceholderImageProvider(url_template=config.PLACEHOLDER_IMAGE_URL, rng=rng)
    return ImageProviderChain(providers, placeholder=placeholder)


async def validate_image_url(url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> bool:
    """Check that a URL answers a HEAD request with an image content type."""
    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            response = await client.head(url, follow_redirects=True)
    except httpx.HTTPError as e:
        logger.debug(f"Image URL validation failed for {url}: {e}")
        return False

    return response.is_success and response.headers.get("content-type", "").startswith("image/")
