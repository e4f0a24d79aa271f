"""Spoonacular recipe search API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class RecipeClient(Protocol):
    """Interface for third-party recipe search."""

    async def search_recipes(self, params: dict[str, str]) -> dict[str, object]:
        """Search recipes and return the raw API payload."""


@dataclass
class HttpxRecipeClient(RecipeClient):
    """HTTPX-backed Spoonacular client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxRecipeClient":
        """Create a recipe client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_recipes(self, params: dict[str, str]) -> dict[str, object]:
        """Run a complex recipe search."""
        url = f"{self.base_url}/recipes/complexSearch"
        response = await self.http_client.get(
            url,
            params={"apiKey": self.api_key, **params},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
