"""
Provider-agnostic LLM factory.

Switch LLM provider by changing env vars, no code changes needed:
  LLM_PROVIDER=openai | gemini | groq
  LLM_MODEL=gpt-4o-mini | gemini-2.0-flash | llama-3.1-70b-versatile
  LLM_API_KEY=your-key
"""

from langchain_core.language_models import BaseChatModel

from app.config import get_settings


def create_llm() -> BaseChatModel:
    """Create an LLM instance based on env configuration.

    Returns:
        BaseChatModel: A LangChain-compatible chat model.

    Raises:
        ValueError: If provider is not supported.
    """
    settings = get_settings()

    match settings.LLM_PROVIDER:
        case "openai":
            from langchain_openai import ChatOpenAI

            return ChatOpenAI(
                model=settings.LLM_MODEL,
                api_key=settings.LLM_API_KEY,
                temperature=settings.LLM_TEMPERATURE,
            )

        case "gemini":
            from langchain_google_genai import ChatGoogleGenerativeAI

            return ChatGoogleGenerativeAI(
                model=settings.LLM_MODEL,
                google_api_key=settings.LLM_API_KEY,
                temperature=settings.LLM_TEMPERATURE,
            )

        case "groq":
            from langchain_groq import ChatGroq

            return ChatGroq(
                model=settings.LLM_MODEL,
                api_key=settings.LLM_API_KEY,
                temperature=settings.LLM_TEMPERATURE,
            )

        case _:
            raise ValueError(
                f"Unknown LLM provider: '{settings.LLM_PROVIDER}'. "
                f"Supported: openai, gemini, groq"
            )
