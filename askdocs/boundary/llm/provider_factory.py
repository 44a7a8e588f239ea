"""
Model provider factory for selecting between Google Gemini and Amazon Bedrock.

Depends on LLM_PROVIDER environment variable.
Provides langchain Embeddings and chat models regardless of provider.

Dependencies: langchain_google_genai, langchain_aws, askdocs.configs
System role: Model instantiation and selection
"""

import logging

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from askdocs.configs import get_settings

logger = logging.getLogger(__name__)


def get_embeddings() -> Embeddings:
    """
    Factory function to get the embedding model for the configured provider.

    Returns:
        Embeddings: Configured embedding model

    Raises:
        ValueError: If LLM_PROVIDER is invalid
    """
    settings = get_settings()
    provider = settings.llm.provider.lower()
    dimension = settings.vector_store.embedding_dimension

    if provider == "google":
        from askdocs.boundary.llm.embeddings_wrapper import FixedDimensionEmbeddings

        logger.info(f"{__name__}:get_embeddings - Creating Gemini embeddings (dimension={dimension})")
        return FixedDimensionEmbeddings(
            model=settings.llm.embedding_model,
            output_dimensionality=dimension,
        )

    elif provider == "bedrock":
        from langchain_aws import BedrockEmbeddings

        logger.info(f"{__name__}:get_embeddings - Creating Bedrock embeddings (dimension={dimension})")
        return BedrockEmbeddings(
            model_id=settings.llm.embedding_model,
            region_name=settings.llm.region,
            model_kwargs={"dimensions": dimension},
        )

    else:
        raise ValueError(
            f"Invalid LLM_PROVIDER: {provider}. Must be 'google' or 'bedrock'."
        )


def get_chat_model() -> BaseChatModel:
    """
    Factory function to get the streaming chat model for the configured provider.

    Returns:
        BaseChatModel: Configured chat model

    Raises:
        ValueError: If LLM_PROVIDER is invalid
    """
    settings = get_settings()
    provider = settings.llm.provider.lower()

    if provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        logger.info(f"{__name__}:get_chat_model - Creating Gemini chat model ({settings.llm.chat_model})")
        return ChatGoogleGenerativeAI(
            model=settings.llm.chat_model,
            temperature=settings.llm.temperature,
            max_output_tokens=settings.llm.max_tokens,
        )

    elif provider == "bedrock":
        from langchain_aws import ChatBedrockConverse

        logger.info(f"{__name__}:get_chat_model - Creating Bedrock chat model ({settings.llm.chat_model})")
        return ChatBedrockConverse(
            model=settings.llm.chat_model,
            region_name=settings.llm.region,
            temperature=settings.llm.temperature,
            max_tokens=settings.llm.max_tokens,
        )

    else:
        raise ValueError(
            f"Invalid LLM_PROVIDER: {provider}. Must be 'google' or 'bedrock'."
        )
