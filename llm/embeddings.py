"""
Embedding Clients - Turn text into query vectors for review retrieval.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx
from openai import OpenAI
from loguru import logger


class EmbeddingClient(ABC):
    """One text in, one fixed-length vector out."""
    
    def __init__(self, model: str):
        self.model = model
    
    @abstractmethod
    def embed(self, text: str) -> List[float]:
        """Embed a single text."""
        pass
    
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model})"


class OpenAIEmbeddingClient(EmbeddingClient):
    """Embeddings through the OpenAI SDK (or any compatible endpoint)."""
    
    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        verify_ssl: bool = True,
    ):
        super().__init__(model)
        http_client = None
        if not verify_ssl:
            http_client = httpx.Client(verify=False)
            logger.warning("SSL verification disabled for embedding client")
        
        self._client = OpenAI(
            api_key=api_key,
            base_url=base_url or None,
            timeout=timeout,
            http_client=http_client,
        )
    
    def embed(self, text: str) -> List[float]:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")
        
        logger.debug(f"Embedding request: model={self.model}, chars={len(text)}")
        try:
            response = self._client.embeddings.create(model=self.model, input=[text])
        except Exception as e:
            logger.error(f"Embedding request failed: {e}")
            raise
        
        return list(response.data[0].embedding)
